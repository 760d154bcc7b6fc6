"""Mapper for LearningProgress ORM ↔ ProgressRecord conversion."""

from codepath.domain.common.value_objects.ids import ProgressRecordId, UserId
from codepath.domain.learning.entities.progress_record import ProgressRecord
from codepath.models import LearningProgress as LearningProgressORM
from codepath.utils import ensure_utc


class ProgressMapper:
    """Mapper for LearningProgress ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: LearningProgressORM) -> ProgressRecord:
        """Convert ORM model to domain entity."""
        return ProgressRecord(
            id=ProgressRecordId(orm_model.id),
            language=orm_model.language,
            completed_topics=list(orm_model.completed_topics or []),
            progress_percent=orm_model.progress_percent,
            current_step=orm_model.current_step,
            last_accessed=ensure_utc(orm_model.last_accessed),
            version=orm_model.version,
        )

    def to_orm(self, user_id: UserId, record: ProgressRecord) -> LearningProgressORM:
        """Build a new ORM row; existing rows are updated with a versioned statement."""
        return LearningProgressORM(
            user_id=user_id.value,
            language=record.language,
            completed_topics=list(record.completed_topics),
            progress_percent=record.progress_percent,
            current_step=record.current_step,
            last_accessed=record.last_accessed,
            version=1,
        )
