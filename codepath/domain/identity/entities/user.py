"""User entity for identity management."""

import re
from dataclasses import dataclass, field
from datetime import datetime

from codepath.domain.common.entity import Entity
from codepath.domain.common.exceptions import ValidationError
from codepath.domain.common.value_objects.ids import UserId
from codepath.domain.identity.entities.role import Role
from codepath.domain.learning.entities.progress_record import ProgressRecord

# Domain constraints
MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 50
MAX_EMAIL_LENGTH = 100

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _normalize_username(username: str) -> str:
    username = (username or "").strip()
    if len(username) < MIN_USERNAME_LENGTH:
        raise ValidationError(
            f"Username must be at least {MIN_USERNAME_LENGTH} characters",
            field="username",
            value=username,
        )
    if len(username) > MAX_USERNAME_LENGTH:
        raise ValidationError(
            f"Username cannot exceed {MAX_USERNAME_LENGTH} characters",
            field="username",
            value=username,
        )
    return username


def _normalize_email(email: str) -> str:
    email = (email or "").strip().lower()
    if not email:
        raise ValidationError("Email cannot be empty", field="email", value=email)
    if len(email) > MAX_EMAIL_LENGTH:
        raise ValidationError(
            f"Email cannot exceed {MAX_EMAIL_LENGTH} characters", field="email", value=email
        )
    if not _EMAIL_PATTERN.match(email):
        raise ValidationError("Email is not valid", field="email", value=email)
    return email


@dataclass
class User(Entity[UserId]):
    """
    User entity representing an authenticated account.

    Business Rules:
    - Username is unique and at least MIN_USERNAME_LENGTH characters
    - Email is unique, stored lower-cased
    - Role defaults to student
    - Learning progress holds at most one record per language
    - Password hashing is an infrastructure concern
    """

    id: UserId
    username: str
    email: str
    role: Role = Role.STUDENT
    hashed_password: str | None = None
    learning_progress: list[ProgressRecord] = field(default_factory=list)
    password_reset_token_hash: str | None = None
    password_reset_expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.username = _normalize_username(self.username)
        self.email = _normalize_email(self.email)
        self.role = Role(self.role)

    def has_password(self) -> bool:
        """Check if this user has a password set."""
        return self.hashed_password is not None

    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def update_username(self, new_username: str) -> None:
        self.username = _normalize_username(new_username)

    def update_email(self, new_email: str) -> None:
        """
        Update the user's email address.

        Raises:
            ValidationError: If email is invalid
        """
        self.email = _normalize_email(new_email)

    def update_password(self, new_hashed_password: str) -> None:
        """Update the user's password (hashing done by infrastructure)."""
        self.hashed_password = new_hashed_password

    def progress_for(self, language: str) -> ProgressRecord | None:
        """Find the progress record for a language, case-insensitively."""
        key = language.strip().lower()
        for record in self.learning_progress:
            if record.language == key:
                return record
        return None

    def start_password_reset(self, token_hash: str, expires_at: datetime) -> None:
        self.password_reset_token_hash = token_hash
        self.password_reset_expires_at = expires_at

    def has_valid_reset_token(self, token_hash: str, now: datetime) -> bool:
        """Check a reset token hash against the stored one and its expiry."""
        if not self.password_reset_token_hash or self.password_reset_expires_at is None:
            return False
        if self.password_reset_token_hash != token_hash:
            return False
        return self.password_reset_expires_at > now

    def clear_password_reset(self) -> None:
        self.password_reset_token_hash = None
        self.password_reset_expires_at = None

    @classmethod
    def create(
        cls,
        username: str,
        email: str,
        hashed_password: str | None = None,
        role: Role = Role.STUDENT,
    ) -> "User":
        """
        Create a new user.

        Raises:
            ValidationError: If username or email is invalid
        """
        return cls(
            id=UserId.generate(),
            username=username,
            email=email,
            role=role,
            hashed_password=hashed_password,
        )

    @classmethod
    def create_with_id(
        cls,
        id: UserId,
        username: str,
        email: str,
        role: Role,
        hashed_password: str | None,
        created_at: datetime,
        updated_at: datetime,
        learning_progress: list[ProgressRecord] | None = None,
        password_reset_token_hash: str | None = None,
        password_reset_expires_at: datetime | None = None,
    ) -> "User":
        """Reconstitute a user from persistence."""
        return cls(
            id=id,
            username=username,
            email=email,
            role=role,
            hashed_password=hashed_password,
            learning_progress=list(learning_progress or []),
            password_reset_token_hash=password_reset_token_hash,
            password_reset_expires_at=password_reset_expires_at,
            created_at=created_at,
            updated_at=updated_at,
        )
