"""Credential and token management for user accounts."""

import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import bcrypt

from accounts.config import Settings
from accounts.models.user import User
from accounts.schemas.user import UserValidationError, validate_user
from accounts.services.notifier import Notifier
from accounts.services.user_store import UserStore

logger = logging.getLogger("accounts")

TOKEN_PURPOSES = ("remember", "activation", "reset")

# Lowest cost bcrypt accepts, for test runs only
BCRYPT_MIN_ROUNDS = 4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CredentialManager:
    """Hashes passwords and issues single-use tokens for a user record.

    Only digests are written to the store. Plaintext tokens are set on the
    ``User`` instance for the current request and handed to the notifier.
    """

    def __init__(
        self,
        settings: Settings,
        store: UserStore,
        notifier: Notifier,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.notifier = notifier
        self._clock = clock or _utcnow

    def now(self) -> datetime:
        return self._clock()

    # --- Hashing ---

    def _gensalt(self) -> bytes:
        if self.settings.BCRYPT_ROUNDS is not None:
            return bcrypt.gensalt(rounds=self.settings.BCRYPT_ROUNDS)
        if self.settings.BCRYPT_MIN_COST:
            return bcrypt.gensalt(rounds=BCRYPT_MIN_ROUNDS)
        return bcrypt.gensalt()

    def digest(self, secret: str) -> str:
        """Return a salted bcrypt hash of ``secret``."""
        return bcrypt.hashpw(secret.encode("utf-8"), self._gensalt()).decode("utf-8")

    def verify(self, secret: str | None, digest: str | None) -> bool:
        """Check ``secret`` against ``digest``. False when either is missing or the digest is malformed."""
        if not digest or secret is None:
            return False
        try:
            return bcrypt.checkpw(secret.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            logger.warning("Rejected malformed or oversized credential during verification")
            return False

    def new_token(self) -> str:
        """Return a random URL-safe token."""
        return secrets.token_urlsafe(self.settings.TOKEN_BYTES)

    # --- Passwords ---

    def set_password(self, user: User, password: str | None, confirmation: str | None = None) -> None:
        """Stage a plaintext password; it is hashed when the user is saved."""
        user.password = password
        user.password_confirmation = confirmation

    def authenticate_password(self, user: User, password: str) -> bool:
        return self.verify(password, user.password_digest)

    # --- Saving ---

    def normalize(self, user: User) -> None:
        """Normalize fields before they are written."""
        user.email = user.email.strip().lower()

    def save(self, user: User) -> User:
        """Validate, normalize, hash any staged password, then save.

        Raises UserValidationError without touching the store if the user is invalid.
        Store errors propagate unchanged.
        """
        require_password = user.is_new and user.password_digest is None
        errors = validate_user(user, self.settings, require_password=require_password)
        if errors:
            raise UserValidationError(errors)

        self.normalize(user)
        if user.password is not None:
            user.password_digest = self.digest(user.password)

        try:
            return self.store.save(user)
        finally:
            user.password = None
            user.password_confirmation = None

    def create_user(
        self,
        name: str,
        email: str,
        password: str | None,
        password_confirmation: str | None = None,
    ) -> User:
        """Build, validate and save a new unactivated user with an activation digest."""
        user = User(name=name, email=email)
        self.set_password(user, password, password_confirmation)
        self.create_activation_digest(user)
        self.save(user)
        logger.info("User created: id=%s email=%s", user.id, user.email)
        return user

    # --- Token checks ---

    def authenticated(self, user: User, purpose: str, token: str | None) -> bool:
        """True if ``token`` matches the stored digest for ``purpose``."""
        if purpose not in TOKEN_PURPOSES:
            raise ValueError(f"Unknown token purpose '{purpose}'. Expected one of: {', '.join(TOKEN_PURPOSES)}")
        return self.verify(token, getattr(user, f"{purpose}_digest"))

    # --- Remember me ---

    def remember(self, user: User) -> str:
        """Issue a remember token, replacing any previous one."""
        user.remember_token = self.new_token()
        self.store.update_fields(user, remember_digest=self.digest(user.remember_token))
        logger.debug("Remember token issued: id=%s", user.id)
        return user.remember_token

    def forget(self, user: User) -> None:
        self.store.update_fields(user, remember_digest=None)
        user.remember_token = None
        logger.debug("Remember token cleared: id=%s", user.id)

    # --- Activation ---

    def create_activation_digest(self, user: User) -> None:
        """Set an activation token and digest on a user that has not been saved yet."""
        user.activation_token = self.new_token()
        user.activation_digest = self.digest(user.activation_token)

    def send_activation(self, user: User) -> None:
        if not user.activation_token:
            raise ValueError(f"User {user.id} has no activation token in this request")
        self.notifier.send_activation(user, user.activation_token)

    def activate(self, user: User) -> None:
        self.store.update_fields(user, activated=True, activated_at=self.now())
        logger.info("User activated: id=%s", user.id)

    # --- Password reset ---

    def create_reset_digest(self, user: User) -> str:
        """Issue a reset token, replacing any previous one, and record when it was sent."""
        user.reset_token = self.new_token()
        self.store.update_fields(
            user,
            reset_digest=self.digest(user.reset_token),
            reset_sent_at=self.now(),
        )
        logger.info("Password reset requested: id=%s", user.id)
        return user.reset_token

    def send_password_reset(self, user: User) -> None:
        if not user.reset_token:
            raise ValueError(f"User {user.id} has no reset token in this request")
        self.notifier.send_password_reset(user, user.reset_token)

    @property
    def reset_expiration(self) -> timedelta:
        return timedelta(hours=self.settings.PASSWORD_RESET_EXPIRATION_HOURS)

    def reset_expired(self, user: User) -> bool:
        """True once the expiration window after ``reset_sent_at`` has passed."""
        if user.reset_sent_at is None:
            return True
        return self.now() > user.reset_sent_at + self.reset_expiration
