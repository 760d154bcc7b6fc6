from .password_reset import PasswordResetNotifierProtocol, ResetTokenServiceProtocol
from .password_service import PasswordServiceProtocol
from .token_service import TokenServiceProtocol
from .user_repository import UserRepositoryProtocol

__all__ = [
    "PasswordResetNotifierProtocol",
    "PasswordServiceProtocol",
    "ResetTokenServiceProtocol",
    "TokenServiceProtocol",
    "UserRepositoryProtocol",
]
