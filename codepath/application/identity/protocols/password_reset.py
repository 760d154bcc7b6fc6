from typing import Protocol

from codepath.domain.identity.entities.user import User


class ResetTokenServiceProtocol(Protocol):
    def generate(self) -> tuple[str, str]:
        """Return (plain token for the user, hash to persist)."""
        ...

    def hash_token(self, token: str) -> str: ...


class PasswordResetNotifierProtocol(Protocol):
    def send_reset_instructions(self, user: User, token: str) -> None: ...
