"""
Progress engine.

Pure update rules for "topic completed" events. Persistence and
concurrency control live in the use case and repository.
"""

from dataclasses import replace
from datetime import datetime

from codepath.domain.common.exceptions import ValidationError
from codepath.domain.learning.entities.progress_record import (
    MAX_PERCENT,
    ROADMAP_STAGE_COUNT,
    ProgressRecord,
    normalize_language,
)


def compute_percent(completed_count: int, total_topics: int) -> int:
    """
    Percentage of topics completed, rounded half up and clamped to [0, 100].

    Integer arithmetic keeps the result exact: round(100 * n / t) for
    non-negative n, t is (200n + t) // 2t.
    """
    if total_topics <= 0 or completed_count <= 0:
        return 0
    percent = (200 * completed_count + total_topics) // (2 * total_topics)
    return min(percent, MAX_PERCENT)


def compute_step(percent: int) -> int:
    """Roadmap stage reached at a given percentage (0-based)."""
    step = (percent * ROADMAP_STAGE_COUNT) // MAX_PERCENT
    return max(0, min(step, ROADMAP_STAGE_COUNT - 1))


def complete_topic(
    language: str,
    topic_id: str,
    current: ProgressRecord | None,
    total_topics: int,
    now: datetime,
) -> ProgressRecord:
    """
    Produce the next progress record after a topic is completed.

    Args:
        language: Language key (case-insensitive)
        topic_id: Topic that was completed
        current: Existing record for the language, or None
        total_topics: Number of known topics for the language
        now: Timestamp recorded as last_accessed

    Returns:
        New ProgressRecord; `current` is not mutated

    Raises:
        ValidationError: If topic_id or language is empty
    """
    topic = (topic_id or "").strip()
    if not topic:
        raise ValidationError("Topic id cannot be empty", field="topic_id", value=topic_id)
    key = normalize_language(language)

    if current is None:
        record = ProgressRecord.start(key, now)
    else:
        if current.language != key:
            raise ValidationError(
                "Progress record belongs to a different language",
                field="language",
                value=language,
            )
        record = replace(current, completed_topics=list(current.completed_topics))

    if not record.has_completed(topic):
        record.completed_topics.append(topic)

    return recalculate(record, total_topics, now)


def recalculate(record: ProgressRecord, total_topics: int, now: datetime) -> ProgressRecord:
    """Re-derive percentage and stage from the completed topic set."""
    percent = compute_percent(len(record.completed_topics), total_topics)
    return replace(
        record,
        progress_percent=percent,
        current_step=compute_step(percent),
        last_accessed=now,
    )
