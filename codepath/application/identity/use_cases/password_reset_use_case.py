"""Use case for the forgot/reset password flow."""

from datetime import timedelta

import structlog

from codepath.application.identity.protocols.password_reset import (
    PasswordResetNotifierProtocol,
    ResetTokenServiceProtocol,
)
from codepath.application.identity.protocols.password_service import PasswordServiceProtocol
from codepath.application.identity.protocols.user_repository import UserRepositoryProtocol
from codepath.domain.identity.entities.user import User
from codepath.domain.identity.exceptions import InvalidResetTokenError
from codepath.utils import utc_now

logger = structlog.get_logger(__name__)


class PasswordResetUseCase:
    """Issue, validate and redeem password reset tokens."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        password_service: PasswordServiceProtocol,
        reset_token_service: ResetTokenServiceProtocol,
        notifier: PasswordResetNotifierProtocol,
        token_ttl_minutes: int,
    ) -> None:
        self.user_repository = user_repository
        self.password_service = password_service
        self.reset_token_service = reset_token_service
        self.notifier = notifier
        self.token_ttl = timedelta(minutes=token_ttl_minutes)

    def request_reset(self, email: str) -> None:
        """
        Start a reset for the account with this email, if there is one.

        Unknown emails are silently ignored so callers cannot probe for accounts.
        """
        user = self.user_repository.find_by_email(email.strip().lower())
        if not user:
            logger.info("password_reset_requested_unknown_email")
            return

        token, token_hash = self.reset_token_service.generate()
        user.start_password_reset(token_hash, utc_now() + self.token_ttl)
        user = self.user_repository.save(user)
        self.notifier.send_reset_instructions(user, token)

        logger.info("password_reset_requested", user_id=user.id.value)

    def validate_token(self, token: str) -> User:
        """
        Resolve a reset token to its user.

        Raises:
            InvalidResetTokenError: If the token is unknown or expired
        """
        token_hash = self.reset_token_service.hash_token(token)
        user = self.user_repository.find_by_reset_token_hash(token_hash)
        if not user or not user.has_valid_reset_token(token_hash, utc_now()):
            raise InvalidResetTokenError
        return user

    def reset_password(self, token: str, new_password: str) -> User:
        """
        Set a new password using a reset token; the token is single use.

        Raises:
            InvalidResetTokenError: If the token is unknown or expired
        """
        user = self.validate_token(token)
        user.update_password(self.password_service.hash_password(new_password))
        user.clear_password_reset()
        user = self.user_repository.save(user)

        logger.info("password_reset_completed", user_id=user.id.value)
        return user
