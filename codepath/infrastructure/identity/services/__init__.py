from .password_service_adapter import PasswordServiceAdapter
from .reset_notifier import LoggingResetNotifier
from .reset_token_service import ResetTokenService
from .token_service_adapter import TokenServiceAdapter

__all__ = [
    "LoggingResetNotifier",
    "PasswordServiceAdapter",
    "ResetTokenService",
    "TokenServiceAdapter",
]
