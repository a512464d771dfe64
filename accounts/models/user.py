"""User model."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any


@dataclass
class User:
    """Application user.

    Only the fields listed in ``PERSISTED_FIELDS`` are written to a store. The
    plaintext password and tokens live on the instance for the current request.
    """

    name: str = ""
    email: str = ""
    id: int | None = None
    password_digest: str | None = None
    remember_digest: str | None = None
    activation_digest: str | None = None
    activated: bool = False
    activated_at: datetime | None = None
    reset_digest: str | None = None
    reset_sent_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # In-memory only
    password: str | None = field(default=None, repr=False, compare=False)
    password_confirmation: str | None = field(default=None, repr=False, compare=False)
    remember_token: str | None = field(default=None, repr=False, compare=False)
    activation_token: str | None = field(default=None, repr=False, compare=False)
    reset_token: str | None = field(default=None, repr=False, compare=False)

    PERSISTED_FIELDS = (
        "id",
        "name",
        "email",
        "password_digest",
        "remember_digest",
        "activation_digest",
        "activated",
        "activated_at",
        "reset_digest",
        "reset_sent_at",
        "created_at",
        "updated_at",
    )

    @property
    def is_new(self) -> bool:
        return self.id is None

    def to_record(self) -> dict[str, Any]:
        """Return the persisted fields as a plain dict."""
        return {name: getattr(self, name) for name in self.PERSISTED_FIELDS}

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "User":
        """Build a user from a stored record, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in record.items() if key in known})
