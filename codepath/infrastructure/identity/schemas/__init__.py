"""Identity context schemas."""

from codepath.infrastructure.identity.schemas.user_schemas import (
    AuthResponse,
    ForgotPasswordRequest,
    RefreshTokenRequest,
    ResetPasswordRequest,
    UserLoginRequest,
    UserProfileResponse,
    UserRegisterRequest,
    UserUpdateRequest,
)

__all__ = [
    "AuthResponse",
    "ForgotPasswordRequest",
    "RefreshTokenRequest",
    "ResetPasswordRequest",
    "UserLoginRequest",
    "UserProfileResponse",
    "UserRegisterRequest",
    "UserUpdateRequest",
]
