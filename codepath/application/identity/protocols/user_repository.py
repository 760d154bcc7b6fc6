from typing import Protocol

from codepath.domain.common.value_objects.ids import UserId
from codepath.domain.identity.entities.user import User


class UserRepositoryProtocol(Protocol):
    def find_by_id(self, user_id: UserId) -> User | None: ...

    def find_by_email(self, email: str) -> User | None: ...

    def find_by_reset_token_hash(self, token_hash: str) -> User | None: ...

    def save(self, user: User) -> User: ...
