import logging
from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, Request, Response

from codepath.application.identity.use_cases.authentication_use_case import AuthenticationUseCase
from codepath.config import get_settings
from codepath.core import container
from codepath.domain.identity.entities.user import User
from codepath.domain.identity.exceptions import InvalidCredentialsError
from codepath.exceptions import UnauthenticatedError
from codepath.infrastructure.common.di import inject_use_case
from codepath.infrastructure.common.rate_limit import AUTH_RATE_LIMIT, limiter
from codepath.infrastructure.common.schemas import MessageResponse
from codepath.infrastructure.identity.schemas import (
    AuthResponse,
    RefreshTokenRequest,
    UserLoginRequest,
    UserProfileResponse,
)
from codepath.infrastructure.identity.services.token_service import (
    REFRESH_TOKEN_EXPIRE_DAYS,
    TokenWithRefresh,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["auth"])
settings = get_settings()

REFRESH_COOKIE_NAME = "refresh_token"
REFRESH_COOKIE_PATH = f"{settings.API_PREFIX}/users"


def set_refresh_cookie(response: Response, refresh_token: str) -> None:
    """Set the refresh token as an httpOnly cookie."""
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=refresh_token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
        path=REFRESH_COOKIE_PATH,
        max_age=REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )


def clear_refresh_cookie(response: Response) -> None:
    """Clear the refresh token cookie."""
    response.delete_cookie(
        key=REFRESH_COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
        path=REFRESH_COOKIE_PATH,
    )


def build_auth_response(user: User, token_pair: TokenWithRefresh) -> AuthResponse:
    return AuthResponse(
        user=UserProfileResponse.from_domain(user),
        **token_pair.model_dump(),
    )


@router.post("/login")
@limiter.limit(AUTH_RATE_LIMIT)  # type: ignore[misc]
async def login(
    request: Request,
    response: Response,
    credentials: UserLoginRequest,
    use_case: AuthenticationUseCase = Depends(inject_use_case(container.authentication_use_case)),
) -> AuthResponse:
    """Log in with email and password."""
    try:
        user, token_pair = use_case.authenticate_user(credentials.email, credentials.password)
    except InvalidCredentialsError:
        raise UnauthenticatedError("Invalid email or password") from None

    set_refresh_cookie(response, token_pair.refresh_token)
    return build_auth_response(user, token_pair)


@router.post("/refresh")
async def refresh(
    response: Response,
    body: RefreshTokenRequest | None = None,
    refresh_token: Annotated[str | None, Cookie()] = None,
    use_case: AuthenticationUseCase = Depends(inject_use_case(container.authentication_use_case)),
) -> AuthResponse:
    """
    Exchange a refresh token for a new token pair.

    The refresh token can be provided either:
    - In the httpOnly cookie (browser clients)
    - In the request body (other clients)
    """
    token = refresh_token
    if not token and body and body.refresh_token:
        token = body.refresh_token

    if not token:
        raise UnauthenticatedError("Refresh token required")

    try:
        user, token_pair = use_case.refresh_access_token(token)
    except InvalidCredentialsError:
        clear_refresh_cookie(response)
        raise UnauthenticatedError("Invalid or expired refresh token") from None

    set_refresh_cookie(response, token_pair.refresh_token)
    return build_auth_response(user, token_pair)


@router.post("/logout")
async def logout(response: Response) -> MessageResponse:
    """
    Log out by clearing the refresh token cookie.

    Access tokens stay valid until they expire.
    """
    clear_refresh_cookie(response)
    return MessageResponse(message="Logged out successfully")
