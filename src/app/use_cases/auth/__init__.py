"""
Authentication Use Cases

Session, credential and password flows.
"""

from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .resolve_caller_use_case import ResolveCallerUseCase
from .logout_use_case import LogoutUseCase
from .validate_password_use_case import ValidatePasswordUseCase
from .change_password_use_case import ChangePasswordUseCase, ChangeCoercionPasswordUseCase
from .dtos import (
    LoginCommand,
    ChangePasswordCommand,
    UserSummary,
    SessionInfo,
    LoginResponse,
    RefreshTokenResponse,
    MessageResponse,
    ValidatePasswordResponse,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RefreshTokenUseCase",
    "ResolveCallerUseCase",
    "LogoutUseCase",
    "ValidatePasswordUseCase",
    "ChangePasswordUseCase",
    "ChangeCoercionPasswordUseCase",
    # DTOs - Commands
    "LoginCommand",
    "ChangePasswordCommand",
    # DTOs - Responses
    "LoginResponse",
    "RefreshTokenResponse",
    "MessageResponse",
    "ValidatePasswordResponse",
    # DTOs - Nested Models
    "UserSummary",
    "SessionInfo",
]
