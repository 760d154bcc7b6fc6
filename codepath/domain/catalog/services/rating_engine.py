"""
Rating engine.

Recomputes a content item's mean rating from its full review list. The
mean is always recalculated from scratch so it never drifts.
"""

from codepath.domain.catalog.entities.review import Review, validate_rating


def average_rating(reviews: list[Review]) -> float:
    """Mean of all ratings; 0.0 when there are no reviews."""
    if not reviews:
        return 0.0
    return sum(review.rating for review in reviews) / len(reviews)


def append_review(reviews: list[Review], review: Review) -> tuple[list[Review], float]:
    """
    Append a review and recompute the average.

    Reviews are never de-duplicated per user: every submission counts.

    Args:
        reviews: Existing reviews (not mutated)
        review: Review to append

    Returns:
        Tuple of (updated review list, new average rating)

    Raises:
        ValidationError: If the rating is outside 1-5
    """
    validate_rating(review.rating)
    updated = [*reviews, review]
    return updated, average_rating(updated)
