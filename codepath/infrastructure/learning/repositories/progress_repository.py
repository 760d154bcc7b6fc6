"""Repository for learning progress records."""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from codepath.domain.common.value_objects.ids import UserId
from codepath.domain.learning.entities.progress_record import ProgressRecord
from codepath.exceptions import ConcurrentUpdateError
from codepath.infrastructure.learning.mappers.progress_mapper import ProgressMapper
from codepath.models import LearningProgress as LearningProgressORM

logger = logging.getLogger(__name__)


class ProgressRepository:
    """Versioned persistence of per-language progress records."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ProgressMapper()

    def find(self, user_id: UserId, language: str) -> ProgressRecord | None:
        stmt = select(LearningProgressORM).where(
            LearningProgressORM.user_id == user_id.value,
            LearningProgressORM.language == language,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, user_id: UserId, record: ProgressRecord) -> ProgressRecord:
        """
        Persist a progress record.

        New records are inserted (a racing insert for the same language hits
        the unique constraint). Existing records are only written when the
        stored version still equals record.version.

        Raises:
            ConcurrentUpdateError: If another writer got there first
        """
        key = f"{user_id.value}/{record.language}"

        if record.id.is_transient():
            orm_model = self.mapper.to_orm(user_id, record)
            self.db.add(orm_model)
            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                raise ConcurrentUpdateError("LearningProgress", key) from e
            self.db.refresh(orm_model)
            logger.info(f"Created progress record {orm_model.id} for {key}")
            return self.mapper.to_domain(orm_model)

        stmt = (
            update(LearningProgressORM)
            .where(
                LearningProgressORM.id == record.id.value,
                LearningProgressORM.version == record.version,
            )
            .values(
                completed_topics=list(record.completed_topics),
                progress_percent=record.progress_percent,
                current_step=record.current_step,
                last_accessed=record.last_accessed,
                version=record.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        if result.rowcount != 1:
            self.db.rollback()
            raise ConcurrentUpdateError("LearningProgress", key)
        self.db.commit()

        saved = self.find(user_id, record.language)
        if saved is None:
            raise ConcurrentUpdateError("LearningProgress", key)
        return saved
