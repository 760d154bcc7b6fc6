"""Per-user, per-language learning progress."""

from dataclasses import dataclass, field
from datetime import datetime

from codepath.domain.common.entity import Entity
from codepath.domain.common.exceptions import ValidationError
from codepath.domain.common.value_objects.ids import ProgressRecordId

MAX_PERCENT = 100
ROADMAP_STAGE_COUNT = 5


def normalize_language(language: str) -> str:
    """Languages are keyed case-insensitively and stored lower-case."""
    key = (language or "").strip().lower()
    if not key:
        raise ValidationError("Language cannot be empty", field="language", value=language)
    return key


@dataclass
class ProgressRecord(Entity[ProgressRecordId]):
    """
    Completion state for one language.

    Business Rules:
    - language is the uniqueness key within a user's progress list
    - completed_topics has set semantics, insertion order kept for display
    - progress_percent is always derived from completed_topics, never set directly
    - version increments on every persisted change (compare-and-swap token)
    """

    id: ProgressRecordId
    language: str
    completed_topics: list[str] = field(default_factory=list)
    progress_percent: int = 0
    current_step: int = 0
    last_accessed: datetime | None = None
    version: int = 0

    def __post_init__(self) -> None:
        self.language = normalize_language(self.language)
        if not 0 <= self.progress_percent <= MAX_PERCENT:
            raise ValidationError(
                "Progress percent must be between 0 and 100",
                field="progress_percent",
                value=self.progress_percent,
            )

    def has_completed(self, topic_id: str) -> bool:
        return topic_id in self.completed_topics

    @classmethod
    def start(cls, language: str, now: datetime) -> "ProgressRecord":
        """Create an empty record (ID and version assigned on first save)."""
        return cls(id=ProgressRecordId.generate(), language=language, last_accessed=now)
