"""Mapper for User ORM ↔ Domain conversion."""

from codepath.domain.common.value_objects.ids import UserId
from codepath.domain.identity.entities.role import Role
from codepath.domain.identity.entities.user import User
from codepath.infrastructure.learning.mappers.progress_mapper import ProgressMapper
from codepath.models import User as UserORM
from codepath.utils import ensure_utc


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def __init__(self) -> None:
        self.progress_mapper = ProgressMapper()

    def to_domain(self, orm_model: UserORM) -> User:
        """Convert ORM model (with its progress rows) to domain entity."""
        return User.create_with_id(
            id=UserId(orm_model.id),
            username=orm_model.username,
            email=orm_model.email,
            role=Role(orm_model.role),
            hashed_password=orm_model.hashed_password,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
            learning_progress=[
                self.progress_mapper.to_domain(row) for row in orm_model.learning_progress
            ],
            password_reset_token_hash=orm_model.password_reset_token_hash,
            password_reset_expires_at=ensure_utc(orm_model.password_reset_expires_at),
        )

    def to_orm(self, domain_entity: User, orm_model: UserORM | None = None) -> UserORM:
        """
        Convert domain entity to ORM model.

        Learning progress is never written through the user; it has its own
        versioned repository.
        """
        if orm_model:
            # Update existing
            orm_model.username = domain_entity.username
            orm_model.email = domain_entity.email
            orm_model.role = domain_entity.role.value
            orm_model.hashed_password = domain_entity.hashed_password
            orm_model.password_reset_token_hash = domain_entity.password_reset_token_hash
            orm_model.password_reset_expires_at = domain_entity.password_reset_expires_at
            return orm_model

        # Create new
        return UserORM(
            id=domain_entity.id.value if not domain_entity.id.is_transient() else None,
            username=domain_entity.username,
            email=domain_entity.email,
            role=domain_entity.role.value,
            hashed_password=domain_entity.hashed_password,
        )
