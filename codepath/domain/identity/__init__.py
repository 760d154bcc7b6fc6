"""Identity domain layer."""

from codepath.domain.identity.entities.role import Role
from codepath.domain.identity.entities.user import User
from codepath.domain.identity.exceptions import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    PasswordVerificationError,
    RegistrationDisabledError,
    UsernameAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    "EmailAlreadyExistsError",
    "InvalidCredentialsError",
    "InvalidResetTokenError",
    "PasswordVerificationError",
    "RegistrationDisabledError",
    "Role",
    "User",
    "UserNotFoundError",
    "UsernameAlreadyExistsError",
]
