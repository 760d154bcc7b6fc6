"""Tests for catalog use cases with an in-memory content repository."""

import copy
from datetime import UTC, datetime

import pytest

from codepath.application.catalog.use_cases.content_management_use_case import (
    ContentManagementUseCase,
)
from codepath.application.catalog.use_cases.content_query_use_case import ContentQueryUseCase
from codepath.application.catalog.use_cases.review_use_case import ReviewUseCase
from codepath.domain.catalog.entities.content import (
    Content,
    ContentMetadata,
    ContentStatus,
    ContentType,
)
from codepath.domain.catalog.entities.review import Review
from codepath.domain.common.exceptions import AuthorizationError, ValidationError
from codepath.domain.common.value_objects.ids import ContentId, ReviewId, UserId
from codepath.domain.identity.entities.role import Role
from codepath.domain.identity.entities.user import User
from codepath.exceptions import ConcurrentUpdateError, ContentNotFoundError

NOW = datetime(2026, 5, 1, tzinfo=UTC)


class InMemoryContentRepository:
    """Versioned content store mirroring the SQL repository's contract."""

    def __init__(self) -> None:
        self.items: dict[int, Content] = {}
        self.next_id = 1
        self.next_review_id = 1
        self.before_write = None

    def _run_hook(self) -> None:
        if self.before_write is not None:
            hook, self.before_write = self.before_write, None
            hook()

    def find_by_id(self, content_id: ContentId) -> Content | None:
        content = self.items.get(content_id.value)
        return copy.deepcopy(content) if content else None

    def find_all(self, language=None, content_type=None, difficulty=None, status=ContentStatus.PUBLISHED):  # noqa: ANN001, ANN201
        return [
            copy.deepcopy(c)
            for c in sorted(self.items.values(), key=lambda c: c.id.value, reverse=True)
            if (language is None or c.language == language)
            and (content_type is None or c.type is content_type)
            and (status is None or c.status is status)
        ]

    def save(self, content: Content) -> Content:
        self._run_hook()
        if content.id.is_transient():
            stored = copy.deepcopy(content)
            stored.id = ContentId(self.next_id)
            stored.version = 1
            self.next_id += 1
        else:
            current = self.items[content.id.value]
            if current.version != content.version:
                raise ConcurrentUpdateError("Content", content.id.value)
            stored = copy.deepcopy(content)
            stored.metadata.view_count = current.metadata.view_count
            stored.metadata.reviews = current.metadata.reviews
            stored.metadata.average_rating = current.metadata.average_rating
            stored.version = current.version + 1
        self.items[stored.id.value] = stored
        return copy.deepcopy(stored)

    def delete(self, content_id: ContentId) -> bool:
        return self.items.pop(content_id.value, None) is not None

    def increment_view_count(self, content_id: ContentId) -> bool:
        content = self.items.get(content_id.value)
        if content is None:
            return False
        content.metadata.view_count += 1
        return True

    def add_review(
        self, content_id: ContentId, review: Review, average_rating: float, expected_version: int
    ) -> None:
        self._run_hook()
        current = self.items[content_id.value]
        if current.version != expected_version:
            raise ConcurrentUpdateError("Content", content_id.value)
        stored_review = copy.deepcopy(review)
        stored_review.id = ReviewId(self.next_review_id)
        self.next_review_id += 1
        current.metadata.reviews.append(stored_review)
        current.metadata.average_rating = average_rating
        current.version += 1


def _user(user_id: int, role: Role) -> User:
    return User(id=UserId(user_id), username=f"user{user_id}", email=f"u{user_id}@ex.com", role=role)


STUDENT = _user(1, Role.STUDENT)
INSTRUCTOR = _user(2, Role.INSTRUCTOR)
OTHER_INSTRUCTOR = _user(3, Role.INSTRUCTOR)
ADMIN = _user(4, Role.ADMIN)


def _content_data(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "language": "Go",
        "type": "tutorial",
        "title": "Goroutines",
        "description": "Lightweight concurrency",
        "body": "go func() {}()",
        "difficulty": "intermediate",
    }
    data.update(overrides)
    return data


@pytest.fixture
def repo() -> InMemoryContentRepository:
    return InMemoryContentRepository()


@pytest.fixture
def management(repo: InMemoryContentRepository) -> ContentManagementUseCase:
    return ContentManagementUseCase(repo, max_attempts=3)  # type: ignore[arg-type]


@pytest.fixture
def reviews(repo: InMemoryContentRepository) -> ReviewUseCase:
    return ReviewUseCase(repo, max_attempts=3)  # type: ignore[arg-type]


@pytest.fixture
def query(repo: InMemoryContentRepository) -> ContentQueryUseCase:
    return ContentQueryUseCase(repo)  # type: ignore[arg-type]


class TestContentManagement:
    def test_create_sets_author_and_draft(self, management: ContentManagementUseCase) -> None:
        content = management.create_content(INSTRUCTOR, _content_data())

        assert content.author_id == INSTRUCTOR.id
        assert content.status is ContentStatus.DRAFT
        assert content.language == "go"

    def test_student_cannot_create(self, management: ContentManagementUseCase) -> None:
        with pytest.raises(AuthorizationError):
            management.create_content(STUDENT, _content_data())

    def test_non_owner_update_leaves_content_unchanged(
        self, management: ContentManagementUseCase, repo: InMemoryContentRepository
    ) -> None:
        content = management.create_content(INSTRUCTOR, _content_data())

        with pytest.raises(AuthorizationError):
            management.update_content(OTHER_INSTRUCTOR, content.id.value, {"title": "Mine now"})

        assert repo.items[content.id.value].title == "Goroutines"

    def test_admin_updates_any(self, management: ContentManagementUseCase) -> None:
        content = management.create_content(INSTRUCTOR, _content_data())

        updated = management.update_content(ADMIN, content.id.value, {"status": "published"})

        assert updated.status is ContentStatus.PUBLISHED
        assert updated.author_id == INSTRUCTOR.id

    def test_update_missing(self, management: ContentManagementUseCase) -> None:
        with pytest.raises(ContentNotFoundError):
            management.update_content(INSTRUCTOR, 404, {"title": "x"})

    def test_student_update_is_denied_before_lookup(
        self, management: ContentManagementUseCase
    ) -> None:
        with pytest.raises(AuthorizationError):
            management.update_content(STUDENT, 404, {"title": "x"})

    def test_update_retries_after_concurrent_review(
        self,
        management: ContentManagementUseCase,
        reviews: ReviewUseCase,
        repo: InMemoryContentRepository,
    ) -> None:
        content = management.create_content(INSTRUCTOR, _content_data())
        repo.before_write = lambda: reviews.add_review(STUDENT, content.id.value, 5, None)

        updated = management.update_content(INSTRUCTOR, content.id.value, {"title": "Channels"})

        assert updated.title == "Channels"
        assert updated.metadata.average_rating == 5.0
        assert len(updated.reviews) == 1

    def test_delete_requires_admin(self, management: ContentManagementUseCase) -> None:
        content = management.create_content(INSTRUCTOR, _content_data())

        with pytest.raises(AuthorizationError):
            management.delete_content(INSTRUCTOR, content.id.value)

        management.delete_content(ADMIN, content.id.value)
        with pytest.raises(ContentNotFoundError):
            management.delete_content(ADMIN, content.id.value)


class TestReviews:
    def test_average_after_each_review(
        self, management: ContentManagementUseCase, reviews: ReviewUseCase
    ) -> None:
        content_id = management.create_content(INSTRUCTOR, _content_data()).id.value

        reviews.add_review(STUDENT, content_id, 4, "good")
        reviews.add_review(OTHER_INSTRUCTOR, content_id, 2, None)
        content = reviews.add_review(ADMIN, content_id, 5, None)

        assert content.metadata.average_rating == pytest.approx(11 / 3)
        assert [r.rating for r in content.reviews] == [4, 2, 5]

    def test_concurrent_reviews_both_count(
        self,
        management: ContentManagementUseCase,
        reviews: ReviewUseCase,
        repo: InMemoryContentRepository,
    ) -> None:
        """A review landing mid-write forces a re-read; the average covers both."""
        content_id = management.create_content(INSTRUCTOR, _content_data()).id.value
        repo.before_write = lambda: reviews.add_review(OTHER_INSTRUCTOR, content_id, 2, None)

        content = reviews.add_review(STUDENT, content_id, 4, None)

        assert sorted(r.rating for r in content.reviews) == [2, 4]
        assert content.metadata.average_rating == 3.0

    def test_invalid_rating(
        self, management: ContentManagementUseCase, reviews: ReviewUseCase
    ) -> None:
        content_id = management.create_content(INSTRUCTOR, _content_data()).id.value

        with pytest.raises(ValidationError):
            reviews.add_review(STUDENT, content_id, 6, None)

    def test_missing_content(self, reviews: ReviewUseCase) -> None:
        with pytest.raises(ContentNotFoundError):
            reviews.add_review(STUDENT, 404, 3, None)


class TestContentQuery:
    def _publish(self, repo: InMemoryContentRepository, **overrides: object) -> Content:
        data = _content_data(status="published", **overrides)
        content = Content.create(author_id=INSTRUCTOR.id, now=NOW, **data)  # type: ignore[arg-type]
        return repo.save(content)

    def test_status_override_needs_admin(
        self, query: ContentQueryUseCase, repo: InMemoryContentRepository
    ) -> None:
        self._publish(repo)

        with pytest.raises(AuthorizationError):
            query.list_by_language("go", status=ContentStatus.DRAFT, actor=INSTRUCTOR)
        with pytest.raises(AuthorizationError):
            query.list_by_language("go", status=ContentStatus.ARCHIVED)
        assert query.list_by_language("go", status=ContentStatus.DRAFT, actor=ADMIN) == []

    def test_get_content_counts_views(
        self, query: ContentQueryUseCase, repo: InMemoryContentRepository
    ) -> None:
        content = self._publish(repo)

        query.get_content(content.id.value)
        fetched = query.get_content(content.id.value)

        assert fetched.metadata.view_count == 2

    def test_get_missing_content(self, query: ContentQueryUseCase) -> None:
        with pytest.raises(ContentNotFoundError):
            query.get_content(404)

    def test_resources_skip_roadmap(
        self, query: ContentQueryUseCase, repo: InMemoryContentRepository
    ) -> None:
        tutorial = self._publish(repo)
        self._publish(repo, type="roadmap", title="Stage")

        assert [c.id for c in query.list_resources("GO")] == [tutorial.id]

    def test_roadmap_uses_actor_progress(
        self, query: ContentQueryUseCase, repo: InMemoryContentRepository
    ) -> None:
        self._publish(repo, type=ContentType.ROADMAP, title="Basics", tags=["syntax"])

        roadmap = query.get_roadmap("Go", actor=None)

        assert roadmap.language == "go"
        assert [stage.title for stage in roadmap.stages] == ["Basics"]
        assert roadmap.progress_percent is None


def test_metadata_defaults() -> None:
    metadata = ContentMetadata()

    assert metadata.reviews == []
    assert metadata.view_count == 0
