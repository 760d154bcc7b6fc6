from typing import Protocol

from codepath.domain.catalog.entities.content import (
    Content,
    ContentStatus,
    ContentType,
    Difficulty,
)
from codepath.domain.catalog.entities.review import Review
from codepath.domain.common.value_objects.ids import ContentId


class ContentRepositoryProtocol(Protocol):
    def find_by_id(self, content_id: ContentId) -> Content | None: ...

    def find_all(
        self,
        language: str | None = None,
        content_type: ContentType | None = None,
        difficulty: Difficulty | None = None,
        status: ContentStatus | None = ContentStatus.PUBLISHED,
    ) -> list[Content]:
        """Filtered contents, newest first. A None filter matches everything."""
        ...

    def languages(self) -> list[str]: ...

    def count_published_by_language(self, language: str) -> int: ...

    def save(self, content: Content) -> Content:
        """
        Insert new content or compare-and-swap an existing row on its version.

        Raises:
            ConcurrentUpdateError: If the stored version moved since the content was read
        """
        ...

    def delete(self, content_id: ContentId) -> bool: ...

    def increment_view_count(self, content_id: ContentId) -> bool: ...

    def add_review(
        self,
        content_id: ContentId,
        review: Review,
        average_rating: float,
        expected_version: int,
    ) -> None:
        """
        Append a review and store the new average in one transaction.

        Raises:
            ConcurrentUpdateError: If the content version moved since it was read
        """
        ...
