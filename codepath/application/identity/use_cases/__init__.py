from .authentication_use_case import AuthenticationUseCase
from .password_reset_use_case import PasswordResetUseCase
from .register_user_use_case import RegisterUserUseCase
from .update_user_use_case import UpdateUserUseCase

__all__ = [
    "AuthenticationUseCase",
    "PasswordResetUseCase",
    "RegisterUserUseCase",
    "UpdateUserUseCase",
]
