"""Use case for recording learning progress."""

import structlog

from codepath.application.catalog.protocols.content_repository import (
    ContentRepositoryProtocol,
)
from codepath.application.common.retry import retry_on_conflict
from codepath.application.identity.protocols.user_repository import UserRepositoryProtocol
from codepath.application.learning.protocols.progress_repository import (
    ProgressRepositoryProtocol,
)
from codepath.domain.common.value_objects.ids import UserId
from codepath.domain.identity.entities.user import User
from codepath.domain.identity.exceptions import UserNotFoundError
from codepath.domain.learning.entities.progress_record import ProgressRecord, normalize_language
from codepath.domain.learning.services import progress_engine
from codepath.utils import utc_now

logger = structlog.get_logger(__name__)


class ProgressUseCase:
    """Apply "topic completed" events to a user's per-language progress."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        progress_repository: ProgressRepositoryProtocol,
        content_repository: ContentRepositoryProtocol,
        max_attempts: int,
    ) -> None:
        self.user_repository = user_repository
        self.progress_repository = progress_repository
        self.content_repository = content_repository
        self.max_attempts = max_attempts

    def complete_topic(self, user_id: int, language: str, topic_id: str) -> User:
        """
        Mark a topic as completed and recompute the language's progress.

        The percentage is derived from the number of published content items
        for the language; completing the same topic twice changes nothing
        but last_accessed.

        Args:
            user_id: ID of the learner
            language: Language the topic belongs to (case-insensitive)
            topic_id: Identifier of the completed topic

        Returns:
            The user with refreshed learning progress

        Raises:
            UserNotFoundError: If the user does not exist
            ValidationError: If topic_id or language is empty
            ConcurrentUpdateError: If every attempt lost a version race
        """
        uid = UserId(user_id)
        if self.user_repository.find_by_id(uid) is None:
            raise UserNotFoundError(user_id)

        key = normalize_language(language)
        total_topics = self.content_repository.count_published_by_language(key)

        def attempt() -> ProgressRecord:
            current = self.progress_repository.find(uid, key)
            updated = progress_engine.complete_topic(key, topic_id, current, total_topics, utc_now())
            return self.progress_repository.save(uid, updated)

        record = retry_on_conflict(
            attempt, self.max_attempts, "LearningProgress", f"{user_id}/{key}"
        )

        logger.info(
            "topic_completed",
            user_id=user_id,
            language=key,
            topic_id=topic_id,
            progress_percent=record.progress_percent,
            total_topics=total_topics,
        )

        user = self.user_repository.find_by_id(uid)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
