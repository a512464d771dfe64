"""Account service: registration, login, activation and password reset."""

import logging
from dataclasses import dataclass

from accounts.config import Settings, get_settings
from accounts.log import configure_logging
from accounts.models.user import User
from accounts.schemas.user import UserValidationError
from accounts.services.credentials import CredentialManager
from accounts.services.notifier import LoggingNotifier
from accounts.services.user_store import DuplicateEmailError, InMemoryUserStore, UserNotFoundError

logger = logging.getLogger("accounts")

INVALID_CREDENTIALS = "Invalid email or password"
INVALID_RESET_LINK = "Invalid or expired reset link"


@dataclass
class AuthResult:
    """Result of an account operation."""

    success: bool
    error: str | None = None
    user_id: int | None = None
    email: str | None = None
    name: str | None = None
    remember_token: str | None = None

    @classmethod
    def for_user(cls, user: User, remember_token: str | None = None) -> "AuthResult":
        return cls(
            success=True,
            user_id=user.id,
            email=user.email,
            name=user.name,
            remember_token=remember_token,
        )


class AccountService:
    """Runs the user-facing account flows on top of a CredentialManager."""

    def __init__(self, manager: CredentialManager) -> None:
        self.manager = manager

    @property
    def store(self):
        return self.manager.store

    def register(
        self,
        name: str,
        email: str,
        password: str,
        password_confirmation: str | None = None,
    ) -> AuthResult:
        """Create an unactivated user and send the activation message."""
        try:
            user = self.manager.create_user(name, email, password, password_confirmation)
        except UserValidationError as exc:
            return AuthResult(success=False, error="; ".join(exc.errors))
        except DuplicateEmailError:
            return AuthResult(success=False, error="Email already registered")

        self.manager.send_activation(user)
        return AuthResult.for_user(user)

    def login(self, email: str, password: str, remember_me: bool = False) -> AuthResult:
        """Authenticate by email and password. Issues or clears the remember token."""
        user = self.store.find_by_email(email)
        if user is None or not self.manager.authenticate_password(user, password):
            return AuthResult(success=False, error=INVALID_CREDENTIALS)

        if not user.activated:
            return AuthResult(success=False, error="Account not activated. Check your email for the activation link.")

        if remember_me:
            self.manager.remember(user)
        else:
            self.manager.forget(user)

        logger.info("User logged in: id=%s", user.id)
        return AuthResult.for_user(user, remember_token=user.remember_token)

    def logout(self, user: User) -> None:
        self.manager.forget(user)

    def remembered_user(self, user_id: int, token: str | None) -> User | None:
        """Return the user for a remember-me cookie, or None if it no longer authenticates."""
        try:
            user = self.store.load(user_id)
        except UserNotFoundError:
            return None
        if not self.manager.authenticated(user, "remember", token):
            return None
        user.remember_token = token
        return user

    def activate_account(self, email: str, token: str) -> AuthResult:
        """Activate a user from the emailed activation link. Each link works once."""
        user = self.store.find_by_email(email)
        if user is None or user.activated or not self.manager.authenticated(user, "activation", token):
            return AuthResult(success=False, error="Invalid activation link")

        self.manager.activate(user)
        return AuthResult.for_user(user)

    def request_password_reset(self, email: str) -> str | None:
        """Create a reset digest for the account and send the reset link.

        Gives back the plaintext token, or None when no account has this email.
        """
        user = self.store.find_by_email(email)
        if user is None:
            return None

        token = self.manager.create_reset_digest(user)
        self.manager.send_password_reset(user)
        return token

    def reset_password(
        self,
        email: str,
        token: str,
        password: str,
        password_confirmation: str | None = None,
    ) -> AuthResult:
        """Set a new password using a valid, unexpired reset token."""
        user = self.store.find_by_email(email)
        if user is None or not user.activated or not self.manager.authenticated(user, "reset", token):
            return AuthResult(success=False, error=INVALID_RESET_LINK)

        if self.manager.reset_expired(user):
            self.store.update_fields(user, reset_digest=None, reset_sent_at=None)
            return AuthResult(success=False, error="Password reset has expired. Please request a new one.")

        if not password:
            return AuthResult(success=False, error="password can't be empty")

        self.manager.set_password(user, password, password_confirmation)
        try:
            self.manager.save(user)
        except UserValidationError as exc:
            return AuthResult(success=False, error="; ".join(exc.errors))

        self.store.update_fields(user, reset_digest=None, reset_sent_at=None)
        user.reset_token = None
        logger.info("Password reset completed: id=%s", user.id)
        return AuthResult.for_user(user)


def build_account_service(settings: Settings | None = None) -> AccountService:
    """Configure logging and wire an AccountService with the in-memory store and the logging notifier."""
    settings = settings or get_settings()
    configure_logging(settings)
    store = InMemoryUserStore()
    notifier = LoggingNotifier(settings.APP_BASE_URL)
    return AccountService(CredentialManager(settings, store, notifier))
