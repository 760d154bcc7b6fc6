"""Use case for reviewing content."""

import structlog

from codepath.application.catalog.protocols.content_repository import (
    ContentRepositoryProtocol,
)
from codepath.application.common.retry import retry_on_conflict
from codepath.domain.catalog.entities.content import Content
from codepath.domain.catalog.entities.review import Review
from codepath.domain.catalog.services.rating_engine import append_review
from codepath.domain.common.value_objects.ids import ContentId
from codepath.domain.identity.entities.user import User
from codepath.domain.identity.services.access_control import Capability, authorize
from codepath.exceptions import ContentNotFoundError
from codepath.utils import utc_now

logger = structlog.get_logger(__name__)


class ReviewUseCase:
    """Append reviews and keep the content's average rating exact."""

    def __init__(self, content_repository: ContentRepositoryProtocol, max_attempts: int) -> None:
        self.content_repository = content_repository
        self.max_attempts = max_attempts

    def add_review(self, actor: User, content_id: int, rating: int, comment: str | None) -> Content:
        """
        Record a review from the actor.

        Args:
            actor: Authenticated reviewer
            content_id: ID of the reviewed content
            rating: Whole number from 1 to 5
            comment: Optional free text

        Returns:
            The content with the new review and average

        Raises:
            AuthorizationError: If the actor may not review content
            ValidationError: If the rating is out of range
            ContentNotFoundError: If the content does not exist
            ConcurrentUpdateError: If every attempt lost a version race
        """
        authorize(actor, Capability.REVIEW_CONTENT)
        review = Review.create(actor.id, rating, comment, utc_now())
        cid = ContentId(content_id)

        def attempt() -> float:
            content = self.content_repository.find_by_id(cid)
            if content is None:
                raise ContentNotFoundError(content_id)
            _, average = append_review(content.reviews, review)
            self.content_repository.add_review(cid, review, average, content.version)
            return average

        average = retry_on_conflict(attempt, self.max_attempts, "Content", content_id)

        logger.info(
            "review_added",
            content_id=content_id,
            user_id=actor.id.value,
            rating=review.rating,
            average_rating=average,
        )

        content = self.content_repository.find_by_id(cid)
        if content is None:
            raise ContentNotFoundError(content_id)
        return content
