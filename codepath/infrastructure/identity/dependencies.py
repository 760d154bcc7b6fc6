"""FastAPI dependencies for identity and authorization."""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from codepath.core import container
from codepath.database import DatabaseSession
from codepath.domain.identity.entities.user import User
from codepath.domain.identity.services.access_control import Capability, has_capability
from codepath.exceptions import ForbiddenError, UnauthenticatedError

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/users/login", auto_error=False)


def _load_user(token: str, db: DatabaseSession) -> User:
    try:
        container.db.override(db)
        user = container.authentication_use_case().resolve_actor(token)
    finally:
        container.db.reset_override()

    if user is None:
        raise UnauthenticatedError
    return user


async def get_current_user(
    token: Annotated[str | None, Depends(oauth2_scheme)], db: DatabaseSession
) -> User:
    """
    Get the current authenticated user from the access token.

    Args:
        token: JWT access token from the Authorization header
        db: Database session

    Returns:
        User domain entity

    Raises:
        UnauthenticatedError: If the token is missing, invalid, a refresh
            token, or belongs to a deleted user
    """
    if not token:
        raise UnauthenticatedError("Not authenticated")
    return _load_user(token, db)


async def get_optional_user(
    token: Annotated[str | None, Depends(oauth2_scheme)], db: DatabaseSession
) -> User | None:
    """Like get_current_user, but anonymous callers get None instead of a 401."""
    if not token:
        return None
    return _load_user(token, db)


def require_capability(capability: Capability) -> Callable[..., Awaitable[User]]:
    """
    Build a dependency that authenticates the caller and checks a role capability.

    Ownership checks need the target resource and happen in the use case.
    """

    async def dependency(current_user: Annotated[User, Depends(get_current_user)]) -> User:
        if not has_capability(current_user.role, capability):
            raise ForbiddenError(
                f"Role '{current_user.role.value}' is not allowed to {capability.value}"
            )
        return current_user

    return dependency


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]
