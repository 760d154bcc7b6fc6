"""Repository for User domain entities."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from codepath.domain.common.value_objects.ids import UserId
from codepath.domain.identity.entities.user import User
from codepath.domain.identity.exceptions import (
    EmailAlreadyExistsError,
    UsernameAlreadyExistsError,
    UserNotFoundError,
)
from codepath.infrastructure.identity.mappers.user_mapper import UserMapper
from codepath.models import User as UserORM

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def _find_one(self, *criteria: object) -> User | None:
        stmt = select(UserORM).options(selectinload(UserORM.learning_progress)).where(*criteria)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_id(self, user_id: UserId) -> User | None:
        """
        Find a user by ID.

        Args:
            user_id: The user ID

        Returns:
            User entity (with learning progress) if found, None otherwise
        """
        return self._find_one(UserORM.id == user_id.value)

    def find_by_email(self, email: str) -> User | None:
        """Find a user by (lower-cased) email."""
        return self._find_one(UserORM.email == email)

    def find_by_reset_token_hash(self, token_hash: str) -> User | None:
        return self._find_one(UserORM.password_reset_token_hash == token_hash)

    def _raise_duplicate(self, user: User, error: IntegrityError) -> None:
        detail = str(error.orig).lower()
        if "username" in detail:
            raise UsernameAlreadyExistsError(user.username) from error
        if "email" in detail:
            raise EmailAlreadyExistsError(user.email) from error
        raise error

    def save(self, user: User) -> User:
        """
        Save a user entity.

        Args:
            user: The user entity to save

        Returns:
            Saved user entity with database-generated values

        Raises:
            EmailAlreadyExistsError: If the email belongs to another account
            UsernameAlreadyExistsError: If the username belongs to another account
            UserNotFoundError: If an existing user vanished before the update
        """
        if user.id.is_transient():
            orm_model = self.mapper.to_orm(user)
            self.db.add(orm_model)
        else:
            stmt = select(UserORM).where(UserORM.id == user.id.value)
            existing = self.db.execute(stmt).scalar_one_or_none()
            if not existing:
                raise UserNotFoundError(user.id.value)
            orm_model = self.mapper.to_orm(user, existing)

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            self._raise_duplicate(user, e)

        self.db.refresh(orm_model)
        logger.info(f"Saved user {orm_model.id} ({orm_model.username})")
        return self.mapper.to_domain(orm_model)
