"""User accounts: password hashing and remember/activation/reset tokens."""

from accounts.config import Settings, get_settings
from accounts.log import configure_logging
from accounts.models.user import User
from accounts.schemas.user import UserValidationError
from accounts.services import (
    AccountService,
    AuthResult,
    CredentialManager,
    InMemoryUserStore,
    LoggingNotifier,
    Notifier,
    UserStore,
)

__all__ = [
    "AccountService",
    "AuthResult",
    "CredentialManager",
    "InMemoryUserStore",
    "LoggingNotifier",
    "Notifier",
    "Settings",
    "User",
    "UserStore",
    "UserValidationError",
    "configure_logging",
    "get_settings",
]
