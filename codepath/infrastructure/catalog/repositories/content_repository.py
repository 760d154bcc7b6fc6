"""Repository for catalog content and its reviews."""

import logging

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session, selectinload

from codepath.domain.catalog.entities.content import (
    Content,
    ContentStatus,
    ContentType,
    Difficulty,
)
from codepath.domain.catalog.entities.review import Review
from codepath.domain.common.value_objects.ids import ContentId
from codepath.exceptions import ConcurrentUpdateError
from codepath.infrastructure.catalog.mappers.content_mapper import ContentMapper
from codepath.models import Content as ContentORM
from codepath.models import ContentReview as ContentReviewORM

logger = logging.getLogger(__name__)


class ContentRepository:
    """Repository for Content domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ContentMapper()

    def find_by_id(self, content_id: ContentId) -> Content | None:
        """
        Find a content item by ID with author and reviews loaded.

        Args:
            content_id: The content ID

        Returns:
            Content entity if found, None otherwise
        """
        stmt = (
            select(ContentORM)
            .options(
                selectinload(ContentORM.author),
                selectinload(ContentORM.reviews).selectinload(ContentReviewORM.user),
            )
            .where(ContentORM.id == content_id.value)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_all(
        self,
        language: str | None = None,
        content_type: ContentType | None = None,
        difficulty: Difficulty | None = None,
        status: ContentStatus | None = ContentStatus.PUBLISHED,
    ) -> list[Content]:
        """
        List content matching every given filter, newest first.

        Reviews are not loaded; list views only need the average.
        """
        stmt = select(ContentORM).options(selectinload(ContentORM.author))
        if language is not None:
            stmt = stmt.where(ContentORM.language == language)
        if content_type is not None:
            stmt = stmt.where(ContentORM.type == content_type.value)
        if difficulty is not None:
            stmt = stmt.where(ContentORM.difficulty == difficulty.value)
        if status is not None:
            stmt = stmt.where(ContentORM.status == status.value)
        stmt = stmt.order_by(ContentORM.created_at.desc(), ContentORM.id.desc())

        return [
            self.mapper.to_domain(row, with_reviews=False)
            for row in self.db.execute(stmt).scalars().all()
        ]

    def languages(self) -> list[str]:
        stmt = (
            select(ContentORM.language)
            .where(ContentORM.status == ContentStatus.PUBLISHED.value)
            .distinct()
            .order_by(ContentORM.language)
        )
        return list(self.db.execute(stmt).scalars().all())

    def count_published_by_language(self, language: str) -> int:
        stmt = select(func.count(ContentORM.id)).where(
            ContentORM.language == language,
            ContentORM.status == ContentStatus.PUBLISHED.value,
        )
        return self.db.execute(stmt).scalar_one()

    def save(self, content: Content) -> Content:
        """
        Save a content entity.

        Updates only touch author-editable columns and are guarded by the
        version read with the entity, so concurrent reviews and view counts
        are never overwritten.

        Raises:
            ConcurrentUpdateError: If the stored version moved
        """
        if content.id.is_transient():
            orm_model = self.mapper.to_orm(content)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.info(f"Created content {orm_model.id} ({orm_model.language}: {orm_model.title})")
            return self._reload(ContentId(orm_model.id))

        stmt = (
            update(ContentORM)
            .where(ContentORM.id == content.id.value, ContentORM.version == content.version)
            .values(**self.mapper.editable_values(content), version=content.version + 1)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        if result.rowcount != 1:
            self.db.rollback()
            raise ConcurrentUpdateError("Content", content.id.value)
        self.db.commit()
        logger.info(f"Updated content {content.id.value}")
        return self._reload(content.id)

    def delete(self, content_id: ContentId) -> bool:
        """Delete content and its reviews. Returns False if nothing was deleted."""
        self.db.execute(
            delete(ContentReviewORM).where(ContentReviewORM.content_id == content_id.value)
        )
        result = self.db.execute(delete(ContentORM).where(ContentORM.id == content_id.value))
        if result.rowcount == 0:
            self.db.rollback()
            return False
        self.db.commit()
        logger.info(f"Deleted content {content_id.value}")
        return True

    def increment_view_count(self, content_id: ContentId) -> bool:
        """Atomically add one view. Returns False if the content does not exist."""
        stmt = (
            update(ContentORM)
            .where(ContentORM.id == content_id.value)
            .values(view_count=ContentORM.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount == 1

    def add_review(
        self,
        content_id: ContentId,
        review: Review,
        average_rating: float,
        expected_version: int,
    ) -> None:
        """
        Insert the review and swap in the new average in one transaction.

        Raises:
            ConcurrentUpdateError: If the content version moved since it was read
        """
        self.db.add(self.mapper.review_to_orm(content_id, review))
        self.db.flush()

        stmt = (
            update(ContentORM)
            .where(ContentORM.id == content_id.value, ContentORM.version == expected_version)
            .values(average_rating=average_rating, version=expected_version + 1)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        if result.rowcount != 1:
            self.db.rollback()
            raise ConcurrentUpdateError("Content", content_id.value)
        self.db.commit()

    def _reload(self, content_id: ContentId) -> Content:
        content = self.find_by_id(content_id)
        if content is None:
            raise ConcurrentUpdateError("Content", content_id.value)
        return content
