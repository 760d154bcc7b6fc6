"""Use case for user registration."""

import structlog

from codepath.application.identity.protocols.password_service import PasswordServiceProtocol
from codepath.application.identity.protocols.token_service import TokenServiceProtocol
from codepath.application.identity.protocols.user_repository import UserRepositoryProtocol
from codepath.application.learning.protocols.progress_repository import (
    ProgressRepositoryProtocol,
)
from codepath.domain.identity.entities.user import User
from codepath.domain.identity.exceptions import RegistrationDisabledError
from codepath.domain.learning.entities.progress_record import ProgressRecord, normalize_language
from codepath.feature_flags import is_user_registrations_enabled
from codepath.infrastructure.identity.services.token_service import TokenWithRefresh
from codepath.utils import utc_now

logger = structlog.get_logger(__name__)


class RegisterUserUseCase:
    """Use case for user registration operations."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        progress_repository: ProgressRepositoryProtocol,
        password_service: PasswordServiceProtocol,
        token_service: TokenServiceProtocol,
    ) -> None:
        """Initialize use case with dependencies."""
        self.user_repository = user_repository
        self.progress_repository = progress_repository
        self.password_service = password_service
        self.token_service = token_service

    def register_user(
        self,
        username: str,
        email: str,
        password: str,
        learning_languages: list[str] | None = None,
    ) -> tuple[User, TokenWithRefresh]:
        """
        Register a new student account.

        Args:
            username: Unique display name
            email: User's email address
            password: User's plain text password (will be hashed)
            learning_languages: Languages to start tracking progress for

        Returns:
            Tuple of (created user, token pair for immediate login)

        Raises:
            RegistrationDisabledError: If registration is disabled via feature flag
            EmailAlreadyExistsError: If email is already registered
            UsernameAlreadyExistsError: If username is taken
            ValidationError: If username, email or a learning language is invalid
        """
        if not is_user_registrations_enabled():
            raise RegistrationDisabledError

        # All validation happens before the hash and the first write
        candidate = User.create(username=username, email=email)
        languages = dict.fromkeys(normalize_language(lang) for lang in learning_languages or [])
        candidate.update_password(self.password_service.hash_password(password))
        user = self.user_repository.save(candidate)

        now = utc_now()
        for language in languages:
            user.learning_progress.append(
                self.progress_repository.save(user.id, ProgressRecord.start(language, now))
            )

        token_pair = self.token_service.create_token_pair(user.id.value)

        logger.info(
            "user_registered",
            user_id=user.id.value,
            username=user.username,
            languages=list(languages),
        )

        return user, token_pair
