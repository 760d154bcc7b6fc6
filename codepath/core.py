from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from codepath.application.catalog.use_cases.content_management_use_case import (
    ContentManagementUseCase,
)
from codepath.application.catalog.use_cases.content_query_use_case import ContentQueryUseCase
from codepath.application.catalog.use_cases.review_use_case import ReviewUseCase
from codepath.application.identity.use_cases.authentication_use_case import AuthenticationUseCase
from codepath.application.identity.use_cases.password_reset_use_case import PasswordResetUseCase
from codepath.application.identity.use_cases.register_user_use_case import RegisterUserUseCase
from codepath.application.identity.use_cases.update_user_use_case import UpdateUserUseCase
from codepath.application.learning.use_cases.progress_use_case import ProgressUseCase
from codepath.config import get_settings
from codepath.infrastructure.catalog.repositories.content_repository import ContentRepository
from codepath.infrastructure.identity.repositories.user_repository import UserRepository
from codepath.infrastructure.identity.services.password_service_adapter import (
    PasswordServiceAdapter,
)
from codepath.infrastructure.identity.services.reset_notifier import LoggingResetNotifier
from codepath.infrastructure.identity.services.reset_token_service import ResetTokenService
from codepath.infrastructure.identity.services.token_service_adapter import TokenServiceAdapter
from codepath.infrastructure.learning.repositories.progress_repository import ProgressRepository

settings = get_settings()


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # Repositories
    user_repository = providers.Factory(UserRepository, db=db)
    progress_repository = providers.Factory(ProgressRepository, db=db)
    content_repository = providers.Factory(ContentRepository, db=db)

    # Identity services
    password_service = providers.Singleton(PasswordServiceAdapter)
    token_service = providers.Singleton(TokenServiceAdapter)
    reset_token_service = providers.Singleton(ResetTokenService)
    reset_notifier = providers.Singleton(LoggingResetNotifier)

    # Identity use cases
    authentication_use_case = providers.Factory(
        AuthenticationUseCase,
        user_repository=user_repository,
        password_service=password_service,
        token_service=token_service,
    )

    register_user_use_case = providers.Factory(
        RegisterUserUseCase,
        user_repository=user_repository,
        progress_repository=progress_repository,
        password_service=password_service,
        token_service=token_service,
    )

    update_user_use_case = providers.Factory(
        UpdateUserUseCase,
        user_repository=user_repository,
        password_service=password_service,
    )

    password_reset_use_case = providers.Factory(
        PasswordResetUseCase,
        user_repository=user_repository,
        password_service=password_service,
        reset_token_service=reset_token_service,
        notifier=reset_notifier,
        token_ttl_minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES,
    )

    # Learning use cases
    progress_use_case = providers.Factory(
        ProgressUseCase,
        user_repository=user_repository,
        progress_repository=progress_repository,
        content_repository=content_repository,
        max_attempts=settings.MAX_UPDATE_ATTEMPTS,
    )

    # Catalog use cases
    content_query_use_case = providers.Factory(
        ContentQueryUseCase,
        content_repository=content_repository,
    )

    content_management_use_case = providers.Factory(
        ContentManagementUseCase,
        content_repository=content_repository,
        max_attempts=settings.MAX_UPDATE_ATTEMPTS,
    )

    review_use_case = providers.Factory(
        ReviewUseCase,
        content_repository=content_repository,
        max_attempts=settings.MAX_UPDATE_ATTEMPTS,
    )


# Initialize container
container = Container()
