import logging

from fastapi import APIRouter, Depends, Request, Response, status

from codepath.application.identity.use_cases.password_reset_use_case import PasswordResetUseCase
from codepath.application.identity.use_cases.register_user_use_case import RegisterUserUseCase
from codepath.application.identity.use_cases.update_user_use_case import UpdateUserUseCase
from codepath.application.learning.use_cases.progress_use_case import ProgressUseCase
from codepath.core import container
from codepath.domain.common.exceptions import DomainError
from codepath.domain.identity.exceptions import RegistrationDisabledError
from codepath.exceptions import CodepathError, ForbiddenError, InternalError
from codepath.infrastructure.common.di import inject_use_case
from codepath.infrastructure.common.rate_limit import AUTH_RATE_LIMIT, limiter
from codepath.infrastructure.common.schemas import MessageResponse
from codepath.infrastructure.identity.dependencies import CurrentUser
from codepath.infrastructure.identity.routers.auth import build_auth_response, set_refresh_cookie
from codepath.infrastructure.identity.schemas import (
    AuthResponse,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    UserProfileResponse,
    UserRegisterRequest,
    UserUpdateRequest,
)
from codepath.infrastructure.learning.schemas import ProgressUpdateRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])

FORGOT_PASSWORD_MESSAGE = "If an account exists for that email, a reset link has been sent"


@router.post("/register", status_code=status.HTTP_201_CREATED)
@limiter.limit(AUTH_RATE_LIMIT)  # type: ignore[misc]
async def register(
    request: Request,
    response: Response,
    register_data: UserRegisterRequest,
    use_case: RegisterUserUseCase = Depends(inject_use_case(container.register_user_use_case)),
) -> AuthResponse:
    """
    Register a new student account.

    Returns a token pair for immediate login after registration.
    """
    try:
        user, token_pair = use_case.register_user(
            username=register_data.username,
            email=register_data.email,
            password=register_data.password,
            learning_languages=register_data.learning_languages,
        )
    except RegistrationDisabledError as e:
        raise ForbiddenError(e.message) from None
    except (CodepathError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to register user: {e!s}", exc_info=True)
        raise InternalError("Failed to register user", error=str(e)) from e

    set_refresh_cookie(response, token_pair.refresh_token)
    return build_auth_response(user, token_pair)


@router.get("/profile")
async def get_profile(current_user: CurrentUser) -> UserProfileResponse:
    """Get the current user's profile and learning progress."""
    return UserProfileResponse.from_domain(current_user)


@router.put("/profile")
async def update_profile(
    current_user: CurrentUser,
    update_data: UserUpdateRequest,
    use_case: UpdateUserUseCase = Depends(inject_use_case(container.update_user_use_case)),
) -> UserProfileResponse:
    """
    Update the current user's profile.

    - To change username or email: provide the field
    - To change password: provide both `current_password` and `new_password`
    """
    try:
        user = use_case.update_user(
            user_id=current_user.id.value,
            username=update_data.username,
            email=update_data.email,
            current_password=update_data.current_password,
            new_password=update_data.new_password,
        )
        return UserProfileResponse.from_domain(user)
    except (CodepathError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to update user {current_user.id.value}: {e!s}", exc_info=True)
        raise InternalError("Failed to update profile", error=str(e)) from e


@router.put("/progress")
async def update_progress(
    current_user: CurrentUser,
    progress_data: ProgressUpdateRequest,
    use_case: ProgressUseCase = Depends(inject_use_case(container.progress_use_case)),
) -> UserProfileResponse:
    """Record a completed topic and return the refreshed profile."""
    try:
        user = use_case.complete_topic(
            user_id=current_user.id.value,
            language=progress_data.language,
            topic_id=progress_data.completed_topic,
        )
        return UserProfileResponse.from_domain(user)
    except (CodepathError, DomainError):
        raise
    except Exception as e:
        logger.error(
            f"Failed to update progress for user {current_user.id.value}: {e!s}", exc_info=True
        )
        raise InternalError("Failed to update progress", error=str(e)) from e


@router.post("/forgot-password")
@limiter.limit(AUTH_RATE_LIMIT)  # type: ignore[misc]
async def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    use_case: PasswordResetUseCase = Depends(inject_use_case(container.password_reset_use_case)),
) -> MessageResponse:
    """Start a password reset. The response never reveals whether the email exists."""
    use_case.request_reset(body.email)
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.get("/reset-password/{token}")
async def validate_reset_token(
    token: str,
    use_case: PasswordResetUseCase = Depends(inject_use_case(container.password_reset_use_case)),
) -> MessageResponse:
    """Check that a reset token is still valid."""
    use_case.validate_token(token)
    return MessageResponse(message="Token is valid")


@router.post("/reset-password/{token}")
async def reset_password(
    token: str,
    body: ResetPasswordRequest,
    use_case: PasswordResetUseCase = Depends(inject_use_case(container.password_reset_use_case)),
) -> MessageResponse:
    """Set a new password with a reset token."""
    use_case.reset_password(token, body.password)
    return MessageResponse(message="Password has been reset successfully")
