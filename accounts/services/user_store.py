"""User record store interface and an in-memory implementation."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from accounts.models.user import User


class UserStoreError(Exception):
    """Base class for record store failures."""


class UserNotFoundError(UserStoreError):
    def __init__(self, user_id: int | None) -> None:
        super().__init__(f"User with ID {user_id} does not exist")
        self.user_id = user_id


class DuplicateEmailError(UserStoreError):
    def __init__(self, email: str) -> None:
        super().__init__(f"Email already registered: {email}")
        self.email = email


class UserStore(ABC):
    """Record store consumed by the credential manager."""

    @abstractmethod
    def load(self, user_id: int) -> User:
        """Load a user by ID. Raises UserNotFoundError if missing."""

    @abstractmethod
    def save(self, user: User) -> User:
        """Insert or fully update a user. Assigns ``id`` on first save."""

    @abstractmethod
    def update_fields(self, user: User, **fields: Any) -> User:
        """Write only the given fields, without validation."""

    @abstractmethod
    def find_by_email(self, email: str) -> User | None:
        """Find a user by email, ignoring case."""

    @abstractmethod
    def latest(self, limit: int | None = None) -> list[User]:
        """Users ordered newest first."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryUserStore(UserStore):
    """Keeps user records in a dict keyed by ID.

    Records hold ``User.PERSISTED_FIELDS`` only; every load builds a new ``User``.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._records: dict[int, dict[str, Any]] = {}
        self._next_id = 1
        self._clock = clock or _utcnow

    def __len__(self) -> int:
        return len(self._records)

    def load(self, user_id: int) -> User:
        record = self._records.get(user_id)
        if record is None:
            raise UserNotFoundError(user_id)
        return User.from_record(record)

    def save(self, user: User) -> User:
        existing = self._find_record(user.email)
        if existing is not None and existing["id"] != user.id:
            raise DuplicateEmailError(user.email)

        now = self._clock()
        if user.is_new:
            user.id = self._next_id
            self._next_id += 1
            user.created_at = now
        elif user.id not in self._records:
            raise UserNotFoundError(user.id)
        user.updated_at = now

        self._records[user.id] = user.to_record()
        return user

    def update_fields(self, user: User, **fields: Any) -> User:
        unknown = set(fields) - set(User.PERSISTED_FIELDS)
        if unknown:
            raise ValueError(f"Not persisted fields: {', '.join(sorted(unknown))}")
        record = self._records.get(user.id) if user.id is not None else None
        if record is None:
            raise UserNotFoundError(user.id)

        fields["updated_at"] = self._clock()
        record.update(fields)
        for name, value in fields.items():
            setattr(user, name, value)
        return user

    def find_by_email(self, email: str) -> User | None:
        record = self._find_record(email)
        return User.from_record(record) if record is not None else None

    def latest(self, limit: int | None = None) -> list[User]:
        records = sorted(self._records.values(), key=lambda r: (r["created_at"], r["id"]), reverse=True)
        if limit is not None:
            records = records[:limit]
        return [User.from_record(record) for record in records]

    def _find_record(self, email: str | None) -> dict[str, Any] | None:
        if not email:
            return None
        wanted = email.strip().lower()
        for record in self._records.values():
            if record["email"].lower() == wanted:
                return record
        return None
