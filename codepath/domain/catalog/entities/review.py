"""Review value recorded against a content item."""

from dataclasses import dataclass
from datetime import datetime

from codepath.domain.common.entity import Entity
from codepath.domain.common.exceptions import ValidationError
from codepath.domain.common.value_objects.ids import ReviewId, UserId

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating: object) -> int:
    """Ratings are whole numbers from MIN_RATING to MAX_RATING."""
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("Rating must be an integer", field="rating", value=rating)
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}", field="rating", value=rating
        )
    return rating


@dataclass
class Review(Entity[ReviewId]):
    """
    A user's rating of a content item.

    Reviews are append-only: never edited or removed once recorded.
    """

    id: ReviewId
    user_id: UserId
    rating: int
    comment: str = ""
    created_at: datetime | None = None
    username: str | None = None

    def __post_init__(self) -> None:
        self.rating = validate_rating(self.rating)
        self.comment = (self.comment or "").strip()

    @classmethod
    def create(cls, user_id: UserId, rating: int, comment: str | None, now: datetime) -> "Review":
        return cls(
            id=ReviewId.generate(),
            user_id=user_id,
            rating=rating,
            comment=comment or "",
            created_at=now,
        )
