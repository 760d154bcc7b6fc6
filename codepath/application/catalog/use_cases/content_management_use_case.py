"""Use case for authoring catalog content."""

from typing import Any

import structlog

from codepath.application.catalog.protocols.content_repository import (
    ContentRepositoryProtocol,
)
from codepath.application.common.retry import retry_on_conflict
from codepath.domain.catalog.entities.content import Content
from codepath.domain.common.value_objects.ids import ContentId
from codepath.domain.identity.entities.user import User
from codepath.domain.identity.services.access_control import Capability, authorize
from codepath.exceptions import ContentNotFoundError
from codepath.utils import utc_now

logger = structlog.get_logger(__name__)


class ContentManagementUseCase:
    """Create, update and delete content on behalf of an authenticated actor."""

    def __init__(self, content_repository: ContentRepositoryProtocol, max_attempts: int) -> None:
        self.content_repository = content_repository
        self.max_attempts = max_attempts

    def create_content(self, actor: User, data: dict[str, Any]) -> Content:
        """
        Create a content item authored by the actor.

        Args:
            actor: Authenticated user
            data: Content fields (language, type, title, description, body,
                difficulty and optionally prerequisites, tags, status, duration_label)

        Returns:
            The persisted content

        Raises:
            AuthorizationError: If the actor may not create content
            ValidationError: If a field is invalid
        """
        authorize(actor, Capability.CREATE_CONTENT)

        content = Content.create(author_id=actor.id, now=utc_now(), **data)
        content = self.content_repository.save(content)

        logger.info(
            "content_created",
            content_id=content.id.value,
            author_id=actor.id.value,
            language=content.language,
        )
        return content

    def update_content(self, actor: User, content_id: int, changes: dict[str, Any]) -> Content:
        """
        Apply a partial update to a content item.

        The role check runs before the lookup, the ownership check after it.

        Raises:
            AuthorizationError: If the actor may not update this content
            ContentNotFoundError: If the content does not exist
            ValidationError: If a changed field is invalid
            ConcurrentUpdateError: If every attempt lost a version race
        """
        authorize(actor, Capability.UPDATE_CONTENT)
        cid = ContentId(content_id)

        def attempt() -> Content:
            content = self.content_repository.find_by_id(cid)
            if content is None:
                raise ContentNotFoundError(content_id)
            authorize(actor, Capability.UPDATE_CONTENT, owner_id=content.author_id)
            content.apply_changes(changes, utc_now())
            return self.content_repository.save(content)

        content = retry_on_conflict(attempt, self.max_attempts, "Content", content_id)

        logger.info(
            "content_updated",
            content_id=content_id,
            actor_id=actor.id.value,
            fields=sorted(changes),
        )
        return content

    def delete_content(self, actor: User, content_id: int) -> None:
        """
        Delete a content item and its reviews.

        Raises:
            AuthorizationError: If the actor may not delete content
            ContentNotFoundError: If the content does not exist
        """
        authorize(actor, Capability.DELETE_CONTENT)

        if not self.content_repository.delete(ContentId(content_id)):
            raise ContentNotFoundError(content_id)

        logger.info("content_deleted", content_id=content_id, actor_id=actor.id.value)
