"""Pytest configuration and fixtures."""

import os

# Must be set before codepath modules read settings
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["COOKIE_SECURE"] = "false"
os.environ["ALLOW_USER_REGISTRATIONS"] = "true"
os.environ["SECRET_KEY"] = "test-signing-key-with-at-least-32-bytes"  # noqa: S105

from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from codepath import models
from codepath.database import Base, get_db
from codepath.infrastructure.identity.services.password_service import hash_password
from codepath.infrastructure.identity.services.token_service import (
    create_access_token,
    create_refresh_token,
)
from codepath.main import app

TEST_PASSWORD = "password123"  # noqa: S105

# Test database URL (in-memory SQLite shared across connections)
TEST_DATABASE_URL = "sqlite:///:memory:"

test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# One hash for every fixture user keeps the suite fast
_TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def competing_session(db_session: Session) -> Generator[Session, None, None]:
    """A second session on the same database for interleaved writers."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client bound to the test database session."""

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def auth_headers(user: models.User) -> dict[str, str]:
    """Bearer header carrying a fresh access token for the user."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def headers_for() -> Callable[[models.User], dict[str, str]]:
    return auth_headers


@pytest.fixture
def refresh_headers_for() -> Callable[[models.User], dict[str, str]]:
    """Bearer header built from a refresh token, which the API must refuse."""

    def _headers(user: models.User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_refresh_token(user.id)}"}

    return _headers


def _create_user(db_session: Session, username: str, role: str) -> models.User:
    user = models.User(
        username=username,
        email=f"{username}@example.com",
        hashed_password=_TEST_PASSWORD_HASH,
        role=role,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_student(db_session: Session) -> models.User:
    return _create_user(db_session, "student", "student")


@pytest.fixture
def test_instructor(db_session: Session) -> models.User:
    return _create_user(db_session, "instructor", "instructor")


@pytest.fixture
def other_instructor(db_session: Session) -> models.User:
    return _create_user(db_session, "other_instructor", "instructor")


@pytest.fixture
def test_admin(db_session: Session) -> models.User:
    return _create_user(db_session, "admin", "admin")


@pytest.fixture
def student_headers(test_student: models.User) -> dict[str, str]:
    return auth_headers(test_student)


@pytest.fixture
def instructor_headers(test_instructor: models.User) -> dict[str, str]:
    return auth_headers(test_instructor)


@pytest.fixture
def other_instructor_headers(other_instructor: models.User) -> dict[str, str]:
    return auth_headers(other_instructor)


@pytest.fixture
def admin_headers(test_admin: models.User) -> dict[str, str]:
    return auth_headers(test_admin)


@pytest.fixture
def make_content(
    db_session: Session, test_instructor: models.User
) -> Callable[..., models.Content]:
    """Factory inserting content rows directly; published python tutorials by default."""
    base_time = datetime(2026, 1, 1, tzinfo=UTC)
    counter = {"n": 0}

    def _make(**overrides: Any) -> models.Content:
        counter["n"] += 1
        values: dict[str, Any] = {
            "language": "python",
            "type": "tutorial",
            "title": f"Python Tutorial {counter['n']}",
            "description": "Learn something useful",
            "body": "Content body",
            "difficulty": "beginner",
            "prerequisites": [],
            "tags": [],
            "author_id": test_instructor.id,
            "status": "published",
            "view_count": 0,
            "average_rating": 0.0,
            "version": 1,
            # Distinct, increasing timestamps make newest-first ordering deterministic
            "created_at": base_time + timedelta(minutes=counter["n"]),
        }
        values.update(overrides)
        content = models.Content(**values)
        db_session.add(content)
        db_session.commit()
        db_session.refresh(content)
        return content

    return _make


@pytest.fixture
def published_content(make_content: Callable[..., models.Content]) -> models.Content:
    return make_content(title="Python Loops", tags=["loops", "control flow"])
