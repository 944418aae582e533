"""
Authentication module.

Orchestrates registration, login, session refresh and logout, password
change and password reset on top of the passwords, tokens, refresh,
accounts and audit modules.

Public API:
- AuthCoordinator: Registration, login, password change
- SessionCoordinator: Refresh, verify, logout
- PasswordResetService: Reset token issue and redemption
- IResetTokenStore, IResetNotifier: Pluggable reset storage and delivery
- Request/response models and auth exceptions
"""

from .interfaces import IResetNotifier, IResetTokenStore
from .models import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    PasswordResetConfirmRequest,
    PasswordResetRequest,
    RefreshRequest,
    RegisterRequest,
    ResetToken,
    TokenPair,
    TokenVerifyResponse,
)
from .exceptions import (
    IncorrectPasswordError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidTokenError,
    MissingTokenError,
)
from .reset import LoggingResetNotifier, PasswordResetService
from .service import AuthCoordinator
from .session import SessionCoordinator
from .store import InMemoryResetTokenStore

__all__ = [
    # Interfaces
    "IResetNotifier",
    "IResetTokenStore",
    # Services
    "AuthCoordinator",
    "SessionCoordinator",
    "PasswordResetService",
    "LoggingResetNotifier",
    "InMemoryResetTokenStore",
    # Models
    "AuthResponse",
    "ChangePasswordRequest",
    "LoginRequest",
    "PasswordResetConfirmRequest",
    "PasswordResetRequest",
    "RefreshRequest",
    "RegisterRequest",
    "ResetToken",
    "TokenPair",
    "TokenVerifyResponse",
    # Exceptions
    "IncorrectPasswordError",
    "InsufficientPermissionsError",
    "InvalidCredentialsError",
    "InvalidResetTokenError",
    "InvalidTokenError",
    "MissingTokenError",
]
