"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./codepath.db"

    SECRET_KEY: str = ""

    # API (constants, not from env)
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "codepath API"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Auth
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30
    REFRESH_TOKEN_SECRET_KEY: str = ""
    COOKIE_SECURE: bool = True
    PASSWORD_PEPPER: str = ""
    PASSWORD_RESET_EXPIRE_MINUTES: int = 60

    # Registration
    ALLOW_USER_REGISTRATIONS: bool = True

    # Rate limiting (login/register)
    RATE_LIMIT_ENABLED: bool = True
    AUTH_RATE_LIMIT: str = "5/minute"

    # Progress and rating writes retry on version conflicts this many times
    MAX_UPDATE_ATTEMPTS: int = 5

    @field_validator("CORS_ORIGINS", mode="after")
    @classmethod
    def strip_cors_origins(cls, value: list[str]) -> list[str]:
        """Drop empty origins."""
        return [origin.strip() for origin in value if origin.strip()]

    @model_validator(mode="after")
    def validate_secrets(self) -> "Settings":
        """Refuse to run production with an empty signing key."""
        if self.ENVIRONMENT == "production" and not self.SECRET_KEY.strip():
            msg = "SECRET_KEY is required in production"
            raise ValueError(msg)
        if self.MAX_UPDATE_ATTEMPTS < 1:
            msg = "MAX_UPDATE_ATTEMPTS must be at least 1"
            raise ValueError(msg)
        return self


def configure_logging(environment: str = "development") -> None:
    """Configure structured logging with structlog."""
    # Determine if we should use JSON output (production) or console output (dev)
    use_json = environment == "production"

    # Configure stdlib logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    # Configure structlog
    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
