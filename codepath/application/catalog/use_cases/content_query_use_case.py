"""Use case for reading the content catalog."""

import structlog

from codepath.application.catalog.protocols.content_repository import (
    ContentRepositoryProtocol,
)
from codepath.domain.catalog.entities.content import (
    Content,
    ContentStatus,
    ContentType,
    Difficulty,
)
from codepath.domain.catalog.services.roadmap import Roadmap, build_roadmap
from codepath.domain.catalog.services.search_ranking import rank
from codepath.domain.common.exceptions import AuthorizationError
from codepath.domain.common.value_objects.ids import ContentId
from codepath.domain.identity.entities.user import User
from codepath.domain.identity.services.access_control import Capability, is_permitted
from codepath.domain.learning.entities.progress_record import normalize_language
from codepath.exceptions import ContentNotFoundError

logger = structlog.get_logger(__name__)


class ContentQueryUseCase:
    """Listing, search, detail and roadmap views over the catalog."""

    def __init__(self, content_repository: ContentRepositoryProtocol) -> None:
        self.content_repository = content_repository

    def _resolve_status(self, status: ContentStatus | None, actor: User | None) -> ContentStatus:
        """Anything other than published is only visible to administrators."""
        if status is None or status is ContentStatus.PUBLISHED:
            return ContentStatus.PUBLISHED
        if actor is None or not is_permitted(actor, Capability.VIEW_UNPUBLISHED):
            raise AuthorizationError(f"Not authorized to list {status.value} content")
        return status

    def list_languages(self) -> list[str]:
        """Distinct languages that have published content, sorted."""
        return self.content_repository.languages()

    def list_by_language(
        self,
        language: str,
        content_type: ContentType | None = None,
        difficulty: Difficulty | None = None,
        status: ContentStatus | None = None,
        actor: User | None = None,
    ) -> list[Content]:
        """
        List contents for a language, newest first.

        Raises:
            AuthorizationError: If a non-published status is requested by a non-admin
        """
        return self.content_repository.find_all(
            language=normalize_language(language),
            content_type=content_type,
            difficulty=difficulty,
            status=self._resolve_status(status, actor),
        )

    def search(
        self,
        query: str | None = None,
        language: str | None = None,
        content_type: ContentType | None = None,
        difficulty: Difficulty | None = None,
        status: ContentStatus | None = None,
        actor: User | None = None,
    ) -> list[Content]:
        """
        Search the catalog and rank results by relevance.

        Args:
            query: Free-text terms matched against title, tags and description
            language: Optional language filter
            content_type: Optional type filter
            difficulty: Optional difficulty filter
            status: Status override (admin only), defaults to published
            actor: Caller, when authenticated

        Returns:
            Matching contents, best match first

        Raises:
            AuthorizationError: If a non-published status is requested by a non-admin
        """
        candidates = self.content_repository.find_all(
            language=normalize_language(language) if language else None,
            content_type=content_type,
            difficulty=difficulty,
            status=self._resolve_status(status, actor),
        )
        results = rank(candidates, query)
        logger.debug("content_search", query=query, candidates=len(candidates), hits=len(results))
        return results

    def list_resources(self, language: str, content_type: ContentType | None = None) -> list[Content]:
        """Published learning resources for a language, excluding roadmap items."""
        contents = self.content_repository.find_all(
            language=normalize_language(language), content_type=content_type
        )
        return [content for content in contents if content.type is not ContentType.ROADMAP]

    def get_roadmap(self, language: str, actor: User | None = None) -> Roadmap:
        """Roadmap stages for a language, with the caller's progress when known."""
        key = normalize_language(language)
        roadmap_contents = self.content_repository.find_all(
            language=key, content_type=ContentType.ROADMAP
        )
        progress = actor.progress_for(key) if actor else None
        return build_roadmap(key, roadmap_contents, progress)

    def get_content(self, content_id: int) -> Content:
        """
        Fetch a content item and count the view.

        Raises:
            ContentNotFoundError: If the content does not exist
        """
        cid = ContentId(content_id)
        if not self.content_repository.increment_view_count(cid):
            raise ContentNotFoundError(content_id)

        content = self.content_repository.find_by_id(cid)
        if content is None:
            raise ContentNotFoundError(content_id)
        return content
