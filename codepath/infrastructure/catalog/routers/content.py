"""API routes for the content catalog."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from codepath.application.catalog.use_cases.content_management_use_case import (
    ContentManagementUseCase,
)
from codepath.application.catalog.use_cases.content_query_use_case import ContentQueryUseCase
from codepath.application.catalog.use_cases.review_use_case import ReviewUseCase
from codepath.core import container
from codepath.domain.catalog.entities.content import ContentStatus, ContentType, Difficulty
from codepath.domain.common.exceptions import DomainError
from codepath.domain.identity.entities.user import User
from codepath.domain.identity.services.access_control import Capability
from codepath.exceptions import CodepathError, InternalError
from codepath.infrastructure.catalog.schemas import (
    ContentCreateRequest,
    ContentResponse,
    ContentUpdateRequest,
    ReviewCreateRequest,
    RoadmapResponse,
)
from codepath.infrastructure.common.di import inject_use_case
from codepath.infrastructure.common.schemas import MessageResponse
from codepath.infrastructure.identity.dependencies import OptionalUser, require_capability

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["content"])

TypeFilter = Annotated[ContentType | None, Query(alias="type")]
DifficultyFilter = Annotated[Difficulty | None, Query()]
StatusFilter = Annotated[ContentStatus | None, Query(description="Admin only unless 'published'")]


@router.get("/languages")
def list_languages(
    use_case: ContentQueryUseCase = Depends(inject_use_case(container.content_query_use_case)),
) -> list[str]:
    """Languages that have published content, sorted alphabetically."""
    try:
        return use_case.list_languages()
    except (CodepathError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list languages: {e!s}", exc_info=True)
        raise InternalError("Failed to list languages", error=str(e)) from e


@router.get("/language/{language}")
def list_content_by_language(
    language: str,
    actor: OptionalUser,
    content_type: TypeFilter = None,
    difficulty: DifficultyFilter = None,
    content_status: Annotated[ContentStatus | None, Query(alias="status")] = None,
    use_case: ContentQueryUseCase = Depends(inject_use_case(container.content_query_use_case)),
) -> list[ContentResponse]:
    """
    List content for a language, newest first.

    Args:
        language: Language key (case-insensitive)
        content_type: Optional type filter
        difficulty: Optional difficulty filter
        content_status: Status override; anything but 'published' requires an admin

    Returns:
        Matching content items with their author
    """
    try:
        contents = use_case.list_by_language(
            language,
            content_type=content_type,
            difficulty=difficulty,
            status=content_status,
            actor=actor,
        )
        return [ContentResponse.from_domain(content) for content in contents]
    except (CodepathError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list content for {language}: {e!s}", exc_info=True)
        raise InternalError("Failed to fetch content", error=str(e)) from e


@router.get("/search")
def search_content(
    actor: OptionalUser,
    query: str | None = None,
    language: str | None = None,
    content_type: TypeFilter = None,
    difficulty: DifficultyFilter = None,
    content_status: Annotated[ContentStatus | None, Query(alias="status")] = None,
    use_case: ContentQueryUseCase = Depends(inject_use_case(container.content_query_use_case)),
) -> list[ContentResponse]:
    """
    Search content by free text.

    Results are ranked by weighted term hits (title, then tags, then
    description); ties are shown newest first.
    """
    try:
        contents = use_case.search(
            query=query,
            language=language,
            content_type=content_type,
            difficulty=difficulty,
            status=content_status,
            actor=actor,
        )
        return [ContentResponse.from_domain(content) for content in contents]
    except (CodepathError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to search content for '{query}': {e!s}", exc_info=True)
        raise InternalError("Failed to search content", error=str(e)) from e


@router.get("/resources/{language}")
def list_resources(
    language: str,
    content_type: TypeFilter = None,
    use_case: ContentQueryUseCase = Depends(inject_use_case(container.content_query_use_case)),
) -> list[ContentResponse]:
    """Published learning resources for a language (roadmap items excluded)."""
    try:
        contents = use_case.list_resources(language, content_type=content_type)
        return [ContentResponse.from_domain(content) for content in contents]
    except (CodepathError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list resources for {language}: {e!s}", exc_info=True)
        raise InternalError("Failed to fetch resources", error=str(e)) from e


@router.get("/roadmap/{language}")
def get_roadmap(
    language: str,
    actor: OptionalUser,
    use_case: ContentQueryUseCase = Depends(inject_use_case(container.content_query_use_case)),
) -> RoadmapResponse:
    """Roadmap stages for a language; includes progress for an authenticated caller."""
    try:
        return RoadmapResponse.from_domain(use_case.get_roadmap(language, actor=actor))
    except (CodepathError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to build roadmap for {language}: {e!s}", exc_info=True)
        raise InternalError("Failed to fetch roadmap", error=str(e)) from e


@router.get("/{content_id}")
def get_content(
    content_id: int,
    use_case: ContentQueryUseCase = Depends(inject_use_case(container.content_query_use_case)),
) -> ContentResponse:
    """Get a single content item. Every fetch counts as a view."""
    try:
        return ContentResponse.from_domain(use_case.get_content(content_id))
    except (CodepathError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to fetch content {content_id}: {e!s}", exc_info=True)
        raise InternalError("Failed to fetch content", error=str(e)) from e


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_content(
    request: ContentCreateRequest,
    current_user: Annotated[User, Depends(require_capability(Capability.CREATE_CONTENT))],
    use_case: ContentManagementUseCase = Depends(
        inject_use_case(container.content_management_use_case)
    ),
) -> ContentResponse:
    """Create a content item authored by the caller (instructors and admins)."""
    try:
        content = use_case.create_content(current_user, request.model_dump())
        return ContentResponse.from_domain(content)
    except (CodepathError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to create content: {e!s}", exc_info=True)
        raise InternalError("Failed to create content", error=str(e)) from e


@router.put("/{content_id}")
def update_content(
    content_id: int,
    request: ContentUpdateRequest,
    current_user: Annotated[User, Depends(require_capability(Capability.UPDATE_CONTENT))],
    use_case: ContentManagementUseCase = Depends(
        inject_use_case(container.content_management_use_case)
    ),
) -> ContentResponse:
    """
    Update a content item.

    Instructors may only update their own content; admins may update any.
    """
    try:
        content = use_case.update_content(
            current_user, content_id, request.model_dump(exclude_unset=True)
        )
        return ContentResponse.from_domain(content)
    except (CodepathError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to update content {content_id}: {e!s}", exc_info=True)
        raise InternalError("Failed to update content", error=str(e)) from e


@router.delete("/{content_id}")
def delete_content(
    content_id: int,
    current_user: Annotated[User, Depends(require_capability(Capability.DELETE_CONTENT))],
    use_case: ContentManagementUseCase = Depends(
        inject_use_case(container.content_management_use_case)
    ),
) -> MessageResponse:
    """Delete a content item and its reviews (admins only)."""
    try:
        use_case.delete_content(current_user, content_id)
        return MessageResponse(message="Content deleted successfully")
    except (CodepathError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to delete content {content_id}: {e!s}", exc_info=True)
        raise InternalError("Failed to delete content", error=str(e)) from e


@router.post("/{content_id}/reviews")
def add_review(
    content_id: int,
    request: ReviewCreateRequest,
    current_user: Annotated[User, Depends(require_capability(Capability.REVIEW_CONTENT))],
    use_case: ReviewUseCase = Depends(inject_use_case(container.review_use_case)),
) -> ContentResponse:
    """Add a review and return the content with its recomputed average rating."""
    try:
        content = use_case.add_review(current_user, content_id, request.rating, request.comment)
        return ContentResponse.from_domain(content)
    except (CodepathError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to add review to content {content_id}: {e!s}", exc_info=True)
        raise InternalError("Failed to add review", error=str(e)) from e
