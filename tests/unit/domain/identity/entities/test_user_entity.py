"""Tests for the User entity."""

from datetime import UTC, datetime, timedelta

import pytest

from codepath.domain.common.exceptions import ValidationError
from codepath.domain.common.value_objects.ids import ProgressRecordId
from codepath.domain.identity.entities.role import Role
from codepath.domain.identity.entities.user import User
from codepath.domain.learning.entities.progress_record import ProgressRecord

NOW = datetime(2026, 4, 1, tzinfo=UTC)


class TestUserCreate:
    def test_defaults_to_student(self) -> None:
        user = User.create(username=" learner ", email=" Learner@Example.COM ")

        assert user.id.is_transient()
        assert user.username == "learner"
        assert user.email == "learner@example.com"
        assert user.role is Role.STUDENT
        assert not user.has_password()

    @pytest.mark.parametrize("username", ["ab", "", "x" * 51])
    def test_invalid_username(self, username: str) -> None:
        with pytest.raises(ValidationError):
            User.create(username=username, email="a@example.com")

    @pytest.mark.parametrize("email", ["", "no-at-sign", "a@b", "two words@example.com"])
    def test_invalid_email(self, email: str) -> None:
        with pytest.raises(ValidationError):
            User.create(username="learner", email=email)

    def test_role_from_string(self) -> None:
        user = User.create(username="mentor", email="t@example.com", role="instructor")  # type: ignore[arg-type]

        assert user.role is Role.INSTRUCTOR
        assert not user.is_admin()


class TestProgressLookup:
    def test_progress_for_is_case_insensitive(self) -> None:
        user = User.create(username="learner", email="l@example.com")
        record = ProgressRecord(id=ProgressRecordId(1), language="python")
        user.learning_progress.append(record)

        assert user.progress_for("Python ") is record
        assert user.progress_for("rust") is None


class TestPasswordReset:
    def test_valid_token(self) -> None:
        user = User.create(username="learner", email="l@example.com")
        user.start_password_reset("hash", NOW + timedelta(minutes=30))

        assert user.has_valid_reset_token("hash", NOW)
        assert not user.has_valid_reset_token("other", NOW)

    def test_expired_token(self) -> None:
        user = User.create(username="learner", email="l@example.com")
        user.start_password_reset("hash", NOW)

        assert not user.has_valid_reset_token("hash", NOW + timedelta(seconds=1))

    def test_cleared_token(self) -> None:
        user = User.create(username="learner", email="l@example.com")
        user.start_password_reset("hash", NOW + timedelta(minutes=30))
        user.clear_password_reset()

        assert not user.has_valid_reset_token("hash", NOW)
