"""Common response schemas."""

from pydantic import BaseModel

from codepath.feature_flags import FeatureFlags


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class ErrorResponse(BaseModel):
    """Body returned for every handled error."""

    message: str
    error: str | None = None


class AppSettingsResponse(BaseModel):
    """Schema for returning public application settings."""

    feature_flags: FeatureFlags
