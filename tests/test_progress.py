"""Tests for learning progress endpoint."""

from collections.abc import Callable

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from codepath import models

PROGRESS_URL = "/api/users/progress"


def _progress_for(profile: dict, language: str) -> dict:
    return next(entry for entry in profile["learning_progress"] if entry["language"] == language)


class TestUpdateProgress:
    """Test suite for PUT /users/progress endpoint."""

    def test_completing_topics_recomputes_percentage(
        self,
        client: TestClient,
        make_content: Callable[..., models.Content],
        student_headers: dict[str, str],
    ) -> None:
        """With three published topics, one is 33% and two is 67%."""
        for _ in range(3):
            make_content()

        first = client.put(
            PROGRESS_URL,
            json={"language": "python", "completed_topic": "variables"},
            headers=student_headers,
        )
        second = client.put(
            PROGRESS_URL,
            json={"language": "python", "completed_topic": "functions"},
            headers=student_headers,
        )

        assert first.status_code == status.HTTP_200_OK
        assert _progress_for(first.json(), "python")["progress_percent"] == 33
        entry = _progress_for(second.json(), "python")
        assert entry["progress_percent"] == 67
        assert entry["completed_topics"] == ["variables", "functions"]
        assert entry["current_step"] == 3
        assert entry["last_accessed"] is not None

    def test_repeating_a_topic_is_idempotent(
        self,
        client: TestClient,
        make_content: Callable[..., models.Content],
        student_headers: dict[str, str],
    ) -> None:
        """The same topic twice is counted once."""
        make_content()
        make_content()
        body = {"language": "python", "completed_topic": "loops"}

        client.put(PROGRESS_URL, json=body, headers=student_headers)
        response = client.put(PROGRESS_URL, json=body, headers=student_headers)

        entry = _progress_for(response.json(), "python")
        assert entry["completed_topics"] == ["loops"]
        assert entry["progress_percent"] == 50

    def test_client_supplied_percentage_is_ignored(
        self,
        client: TestClient,
        make_content: Callable[..., models.Content],
        student_headers: dict[str, str],
    ) -> None:
        for _ in range(4):
            make_content()

        response = client.put(
            PROGRESS_URL,
            json={"language": "python", "completed_topic": "loops", "progress": 100},
            headers=student_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert _progress_for(response.json(), "python")["progress_percent"] == 25

    def test_language_is_case_insensitive(
        self,
        client: TestClient,
        db_session: Session,
        make_content: Callable[..., models.Content],
        test_student: models.User,
        student_headers: dict[str, str],
    ) -> None:
        """Python and python update one record."""
        make_content()
        make_content()

        client.put(
            PROGRESS_URL,
            json={"language": "Python", "completed_topic": "a"},
            headers=student_headers,
        )
        response = client.put(
            PROGRESS_URL,
            json={"language": "python", "completed_topic": "b"},
            headers=student_headers,
        )

        assert [e["language"] for e in response.json()["learning_progress"]] == ["python"]
        assert (
            db_session.query(models.LearningProgress)
            .filter_by(user_id=test_student.id)
            .count()
            == 1
        )

    def test_language_without_content_stays_at_zero(
        self, client: TestClient, student_headers: dict[str, str]
    ) -> None:
        """No published topics means no percentage, but the topic is still recorded."""
        response = client.put(
            PROGRESS_URL,
            json={"language": "haskell", "completed_topic": "monads"},
            headers=student_headers,
        )

        entry = _progress_for(response.json(), "haskell")
        assert entry["progress_percent"] == 0
        assert entry["completed_topics"] == ["monads"]

    def test_blank_topic_is_rejected(
        self, client: TestClient, student_headers: dict[str, str]
    ) -> None:
        response = client.put(
            PROGRESS_URL,
            json={"language": "python", "completed_topic": "   "},
            headers=student_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_missing_topic_is_rejected(
        self, client: TestClient, student_headers: dict[str, str]
    ) -> None:
        response = client.put(PROGRESS_URL, json={"language": "python"}, headers=student_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_requires_authentication(self, client: TestClient) -> None:
        response = client.put(PROGRESS_URL, json={"language": "python", "completed_topic": "a"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_deleted_user_token_is_rejected(
        self,
        client: TestClient,
        db_session: Session,
        test_student: models.User,
        student_headers: dict[str, str],
    ) -> None:
        """A valid token for a user that no longer exists is 401."""
        db_session.delete(test_student)
        db_session.commit()

        response = client.put(
            PROGRESS_URL,
            json={"language": "python", "completed_topic": "a"},
            headers=student_headers,
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_other_languages_are_untouched(
        self,
        client: TestClient,
        make_content: Callable[..., models.Content],
        student_headers: dict[str, str],
    ) -> None:
        make_content()
        make_content(language="javascript")
        client.put(
            PROGRESS_URL,
            json={"language": "javascript", "completed_topic": "closures"},
            headers=student_headers,
        )

        response = client.put(
            PROGRESS_URL,
            json={"language": "python", "completed_topic": "loops"},
            headers=student_headers,
        )

        profile = response.json()
        assert _progress_for(profile, "javascript")["completed_topics"] == ["closures"]
        assert _progress_for(profile, "python")["progress_percent"] == 100
