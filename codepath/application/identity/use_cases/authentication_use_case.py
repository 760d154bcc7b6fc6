"""Use case for logging in and resolving the acting user from a token."""

import structlog

from codepath.application.identity.protocols.password_service import PasswordServiceProtocol
from codepath.application.identity.protocols.token_service import TokenServiceProtocol
from codepath.application.identity.protocols.user_repository import UserRepositoryProtocol
from codepath.domain.common.value_objects.ids import UserId
from codepath.domain.identity.entities.user import User
from codepath.domain.identity.exceptions import InvalidCredentialsError
from codepath.infrastructure.identity.services.token_service import TokenWithRefresh

logger = structlog.get_logger(__name__)


class AuthenticationUseCase:
    """Turns credentials into token pairs and tokens back into role-bearing actors."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        password_service: PasswordServiceProtocol,
        token_service: TokenServiceProtocol,
    ) -> None:
        self.user_repository = user_repository
        self.password_service = password_service
        self.token_service = token_service

    def authenticate_user(self, email: str, password: str) -> tuple[User, TokenWithRefresh]:
        """
        Log a learner, instructor or admin in with email and password.

        A stored hash made with outdated parameters is replaced on success.

        Args:
            email: Account email (case-insensitive)
            password: Plain text password

        Returns:
            Tuple of (user with learning progress, token pair)

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        user = self.user_repository.find_by_email(email.strip().lower())

        if user is None:
            # Unknown emails still pay for one verification
            self.password_service.verify_password(password, self.password_service.get_dummy_hash())
            logger.warning("login_failed", reason="unknown_email")
            raise InvalidCredentialsError

        if not user.hashed_password:
            logger.warning("login_failed", reason="no_password", user_id=user.id.value)
            raise InvalidCredentialsError

        valid, upgraded_hash = self.password_service.verify_and_update_password(
            password, user.hashed_password
        )
        if not valid:
            logger.warning("login_failed", reason="wrong_password", user_id=user.id.value)
            raise InvalidCredentialsError

        if upgraded_hash:
            user.update_password(upgraded_hash)
            user = self.user_repository.save(user)
            logger.info("password_hash_upgraded", user_id=user.id.value)

        token_pair = self.token_service.create_token_pair(user.id.value)

        logger.info(
            "user_authenticated",
            user_id=user.id.value,
            role=user.role.value,
            tracked_languages=[record.language for record in user.learning_progress],
        )

        return user, token_pair

    def refresh_access_token(self, refresh_token: str) -> tuple[User, TokenWithRefresh]:
        """
        Exchange a refresh token for a new pair.

        Raises:
            InvalidCredentialsError: If the token is invalid or its user was deleted
        """
        user_id = self.token_service.verify_refresh_token(refresh_token)
        if user_id is None:
            raise InvalidCredentialsError

        user = self.user_repository.find_by_id(UserId(user_id))
        if user is None:
            logger.warning("refresh_for_deleted_user", user_id=user_id)
            raise InvalidCredentialsError

        token_pair = self.token_service.create_token_pair(user.id.value)
        logger.info("access_token_refreshed", user_id=user.id.value, role=user.role.value)
        return user, token_pair

    def resolve_actor(self, access_token: str) -> User | None:
        """
        Load the user an access token was issued to.

        The returned user carries the role that access control decisions are
        made on, as stored now rather than as it was when the token was issued.
        Refresh tokens, expired tokens and tokens of deleted users give None.
        """
        user_id = self.token_service.verify_access_token(access_token)
        if user_id is None:
            return None
        user = self.user_repository.find_by_id(UserId(user_id))
        if user is None:
            logger.warning("token_for_deleted_user", user_id=user_id)
        return user
