"""Pydantic schemas for accounts and authentication."""

from datetime import datetime

from pydantic import BaseModel, Field

from codepath.domain.identity.entities.user import User
from codepath.infrastructure.learning.schemas.progress_schemas import LearningProgressResponse

MIN_PASSWORD_LENGTH = 6


class UserProfileResponse(BaseModel):
    """Schema for returning a user's profile with learning progress."""

    id: int = Field(..., description="User id")
    username: str
    email: str
    role: str
    learning_progress: list[LearningProgressResponse] = Field(default_factory=list)
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, user: User) -> "UserProfileResponse":
        return cls(
            id=user.id.value,
            username=user.username,
            email=user.email,
            role=user.role.value,
            learning_progress=[
                LearningProgressResponse.from_domain(record) for record in user.learning_progress
            ],
            created_at=user.created_at,
        )


class AuthResponse(BaseModel):
    """Token pair returned on login, registration and refresh."""

    user: UserProfileResponse
    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class UserRegisterRequest(BaseModel):
    """Schema for user registration."""

    username: str = Field(..., min_length=3, max_length=50, description="Unique username")
    email: str = Field(..., min_length=3, max_length=100, description="Email address")
    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        description=f"Password (min {MIN_PASSWORD_LENGTH} characters)",
    )
    learning_languages: list[str] = Field(
        default_factory=list, description="Languages to start tracking progress for"
    )


class UserLoginRequest(BaseModel):
    """Schema for email/password login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RefreshTokenRequest(BaseModel):
    """Request body for refresh token (clients without cookies)."""

    refresh_token: str | None = None


class UserUpdateRequest(BaseModel):
    """Schema for updating user profile."""

    username: str | None = Field(None, min_length=3, max_length=50, description="New username")
    email: str | None = Field(None, min_length=3, max_length=100, description="New email")
    current_password: str | None = Field(
        None, min_length=1, description="Current password (required when changing password)"
    )
    new_password: str | None = Field(
        None,
        min_length=MIN_PASSWORD_LENGTH,
        description=f"New password (min {MIN_PASSWORD_LENGTH} characters)",
    )


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., min_length=1)


class ResetPasswordRequest(BaseModel):
    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        description=f"New password (min {MIN_PASSWORD_LENGTH} characters)",
    )
