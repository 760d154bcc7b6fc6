"""Tests for ProgressUseCase with in-memory repositories."""

from dataclasses import replace

import pytest

from codepath.application.learning.use_cases.progress_use_case import ProgressUseCase
from codepath.domain.common.value_objects.ids import ProgressRecordId, UserId
from codepath.domain.identity.entities.user import User
from codepath.domain.identity.exceptions import UserNotFoundError
from codepath.domain.learning.entities.progress_record import ProgressRecord
from codepath.exceptions import ConcurrentUpdateError


class InMemoryProgressRepository:
    """Versioned store; `before_save` lets a test inject a competing writer."""

    def __init__(self) -> None:
        self.records: dict[tuple[int, str], ProgressRecord] = {}
        self.next_id = 1
        self.before_save = None
        self.saves = 0

    def find(self, user_id: UserId, language: str) -> ProgressRecord | None:
        record = self.records.get((user_id.value, language))
        return replace(record, completed_topics=list(record.completed_topics)) if record else None

    def save(self, user_id: UserId, record: ProgressRecord) -> ProgressRecord:
        if self.before_save is not None:
            hook, self.before_save = self.before_save, None
            hook()
        self.saves += 1
        key = (user_id.value, record.language)
        stored = self.records.get(key)
        if record.id.is_transient():
            if stored is not None:
                raise ConcurrentUpdateError("LearningProgress", key)
            saved = replace(record, id=ProgressRecordId(self.next_id), version=1)
            self.next_id += 1
        else:
            if stored is None or stored.version != record.version:
                raise ConcurrentUpdateError("LearningProgress", key)
            saved = replace(record, version=record.version + 1)
        self.records[key] = saved
        return self.find(user_id, record.language)  # type: ignore[return-value]


class InMemoryUserRepository:
    def __init__(self, progress: InMemoryProgressRepository) -> None:
        self.users: dict[int, User] = {}
        self.progress = progress

    def find_by_id(self, user_id: UserId) -> User | None:
        user = self.users.get(user_id.value)
        if user is None:
            return None
        records = [r for (uid, _), r in self.progress.records.items() if uid == user_id.value]
        return replace(user, learning_progress=records)


class FixedCountContentRepository:
    def __init__(self, counts: dict[str, int]) -> None:
        self.counts = counts

    def count_published_by_language(self, language: str) -> int:
        return self.counts.get(language, 0)


@pytest.fixture
def progress_repo() -> InMemoryProgressRepository:
    return InMemoryProgressRepository()


@pytest.fixture
def use_case(progress_repo: InMemoryProgressRepository) -> ProgressUseCase:
    users = InMemoryUserRepository(progress_repo)
    users.users[1] = User(id=UserId(1), username="learner", email="l@example.com")
    return ProgressUseCase(
        user_repository=users,  # type: ignore[arg-type]
        progress_repository=progress_repo,
        content_repository=FixedCountContentRepository({"python": 3}),  # type: ignore[arg-type]
        max_attempts=3,
    )


class TestCompleteTopic:
    def test_creates_then_updates(self, use_case: ProgressUseCase) -> None:
        use_case.complete_topic(1, "Python", "loops")
        user = use_case.complete_topic(1, "python", "functions")

        record = user.progress_for("python")
        assert record is not None
        assert record.completed_topics == ["loops", "functions"]
        assert record.progress_percent == 67
        assert record.version == 2

    def test_unknown_user(self, use_case: ProgressUseCase) -> None:
        with pytest.raises(UserNotFoundError):
            use_case.complete_topic(99, "python", "loops")

    def test_concurrent_update_is_not_lost(
        self, use_case: ProgressUseCase, progress_repo: InMemoryProgressRepository
    ) -> None:
        """A writer that lands between read and write forces a re-read, keeping both topics."""
        use_case.complete_topic(1, "python", "loops")

        def competing_writer() -> None:
            key = (1, "python")
            stored = progress_repo.records[key]
            progress_repo.records[key] = replace(
                stored,
                completed_topics=[*stored.completed_topics, "classes"],
                version=stored.version + 1,
            )

        progress_repo.before_save = competing_writer
        user = use_case.complete_topic(1, "python", "functions")

        record = user.progress_for("python")
        assert record is not None
        assert record.completed_topics == ["loops", "classes", "functions"]
        assert record.progress_percent == 100

    def test_racing_first_insert_is_retried_as_update(
        self, use_case: ProgressUseCase, progress_repo: InMemoryProgressRepository
    ) -> None:
        def competing_insert() -> None:
            progress_repo.records[(1, "python")] = ProgressRecord(
                id=ProgressRecordId(50), language="python", completed_topics=["intro"], version=1
            )

        progress_repo.before_save = competing_insert
        user = use_case.complete_topic(1, "python", "loops")

        record = user.progress_for("python")
        assert record is not None
        assert record.completed_topics == ["intro", "loops"]

    def test_gives_up_after_max_attempts(
        self, use_case: ProgressUseCase, progress_repo: InMemoryProgressRepository
    ) -> None:
        use_case.complete_topic(1, "python", "loops")

        def always_conflict(user_id: UserId, record: ProgressRecord) -> ProgressRecord:
            progress_repo.saves += 1
            raise ConcurrentUpdateError("LearningProgress", "1/python")

        progress_repo.save = always_conflict  # type: ignore[method-assign]
        progress_repo.saves = 0

        with pytest.raises(ConcurrentUpdateError):
            use_case.complete_topic(1, "python", "functions")
        assert progress_repo.saves == 3
