"""Account services."""

from accounts.services.accounts import AccountService, AuthResult, build_account_service
from accounts.services.credentials import CredentialManager
from accounts.services.notifier import LoggingNotifier, Notifier
from accounts.services.user_store import (
    DuplicateEmailError,
    InMemoryUserStore,
    UserNotFoundError,
    UserStore,
    UserStoreError,
)

__all__ = [
    "AccountService",
    "AuthResult",
    "CredentialManager",
    "DuplicateEmailError",
    "InMemoryUserStore",
    "LoggingNotifier",
    "Notifier",
    "UserNotFoundError",
    "UserStore",
    "UserStoreError",
    "build_account_service",
]
