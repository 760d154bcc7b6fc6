"""Pydantic schemas for learning progress."""

from datetime import datetime

from pydantic import BaseModel, Field

from codepath.domain.learning.entities.progress_record import ProgressRecord


class LearningProgressResponse(BaseModel):
    """Progress for one language."""

    language: str
    completed_topics: list[str]
    progress_percent: int = Field(..., ge=0, le=100)
    current_step: int = Field(..., ge=0)
    last_accessed: datetime | None = None

    @classmethod
    def from_domain(cls, record: ProgressRecord) -> "LearningProgressResponse":
        return cls(
            language=record.language,
            completed_topics=list(record.completed_topics),
            progress_percent=record.progress_percent,
            current_step=record.current_step,
            last_accessed=record.last_accessed,
        )


class ProgressUpdateRequest(BaseModel):
    """
    Schema for reporting a completed topic.

    The percentage is always computed server-side; a client supplied
    `progress` field is ignored.
    """

    language: str = Field(..., min_length=1, max_length=50, description="Language of the topic")
    completed_topic: str = Field(..., min_length=1, description="Identifier of the completed topic")
