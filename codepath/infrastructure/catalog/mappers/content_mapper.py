"""Mapper for Content ORM ↔ Domain conversion."""

from codepath.domain.catalog.entities.content import Content, ContentMetadata
from codepath.domain.catalog.entities.review import Review
from codepath.domain.common.value_objects.ids import ContentId, ReviewId, UserId
from codepath.models import Content as ContentORM
from codepath.models import ContentReview as ContentReviewORM
from codepath.utils import ensure_utc


class ContentMapper:
    """Mapper for Content ORM ↔ Domain conversion."""

    def review_to_domain(self, orm_model: ContentReviewORM) -> Review:
        return Review(
            id=ReviewId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            rating=orm_model.rating,
            comment=orm_model.comment,
            created_at=ensure_utc(orm_model.created_at),
            username=orm_model.user.username if orm_model.user else None,
        )

    def review_to_orm(self, content_id: ContentId, review: Review) -> ContentReviewORM:
        return ContentReviewORM(
            content_id=content_id.value,
            user_id=review.user_id.value,
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
        )

    def to_domain(self, orm_model: ContentORM, with_reviews: bool = True) -> Content:
        """Convert ORM model to domain entity, optionally loading its reviews."""
        reviews = [self.review_to_domain(r) for r in orm_model.reviews] if with_reviews else []
        return Content(
            id=ContentId(orm_model.id),
            language=orm_model.language,
            type=orm_model.type,  # type: ignore[arg-type]
            title=orm_model.title,
            description=orm_model.description,
            body=orm_model.body,
            difficulty=orm_model.difficulty,  # type: ignore[arg-type]
            author_id=UserId(orm_model.author_id),
            prerequisites=list(orm_model.prerequisites or []),
            tags=list(orm_model.tags or []),
            status=orm_model.status,  # type: ignore[arg-type]
            metadata=ContentMetadata(
                duration_label=orm_model.duration_label,
                last_updated=ensure_utc(orm_model.last_updated),
                view_count=orm_model.view_count,
                average_rating=orm_model.average_rating,
                reviews=reviews,
            ),
            author_username=orm_model.author.username if orm_model.author else None,
            version=orm_model.version,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def editable_values(self, content: Content) -> dict[str, object]:
        """Columns an author may change; counters and rating are excluded."""
        return {
            "language": content.language,
            "type": content.type.value,
            "title": content.title,
            "description": content.description,
            "body": content.body,
            "difficulty": content.difficulty.value,
            "prerequisites": list(content.prerequisites),
            "tags": list(content.tags),
            "status": content.status.value,
            "duration_label": content.metadata.duration_label,
            "last_updated": content.metadata.last_updated,
        }

    def to_orm(self, content: Content) -> ContentORM:
        """Build a new ORM row for transient content."""
        return ContentORM(
            author_id=content.author_id.value,
            view_count=0,
            average_rating=0.0,
            version=1,
            **self.editable_values(content),
        )
