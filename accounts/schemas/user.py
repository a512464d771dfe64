"""Pydantic schemas for validating user fields.

Limits come from a ``Settings`` instance passed in the validation context, so
the same schema enforces whatever configuration the caller supplies.
"""

import re

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator, model_validator

from accounts.config import Settings
from accounts.models.user import User

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class UserValidationError(ValueError):
    """Raised when a user record fails validation and is not saved."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


def _settings(info: ValidationInfo) -> Settings:
    context = info.context or {}
    return context["settings"]


class UserForm(BaseModel):
    """User fields as submitted for create or update."""

    name: str | None = Field(default=None, validate_default=True)
    email: str | None = Field(default=None, validate_default=True)
    password: str | None = Field(default=None, validate_default=True)
    password_confirmation: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None, info: ValidationInfo) -> str | None:
        settings = _settings(info)
        if v is None or not v.strip():
            raise ValueError("can't be blank")
        if len(v) > settings.USER_NAME_MAX_LENGTH:
            raise ValueError(f"is too long (maximum is {settings.USER_NAME_MAX_LENGTH} characters)")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None, info: ValidationInfo) -> str | None:
        settings = _settings(info)
        if v is None or not v.strip():
            raise ValueError("can't be blank")
        if len(v) < settings.USER_EMAIL_MIN_LENGTH:
            raise ValueError(f"is too short (minimum is {settings.USER_EMAIL_MIN_LENGTH} characters)")
        if len(v) > settings.USER_EMAIL_MAX_LENGTH:
            raise ValueError(f"is too long (maximum is {settings.USER_EMAIL_MAX_LENGTH} characters)")
        if not re.fullmatch(settings.EMAIL_REGEX, v, re.IGNORECASE):
            raise ValueError("is invalid")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None, info: ValidationInfo) -> str | None:
        """Validate the password only when one was supplied, unless it is required."""
        settings = _settings(info)
        context = info.context or {}
        if v is None:
            if context.get("require_password"):
                raise ValueError("can't be blank")
            return v
        if not v.strip():
            raise ValueError("can't be blank")
        if len(v) < settings.PASSWORD_MIN_LENGTH:
            raise ValueError(f"is too short (minimum is {settings.PASSWORD_MIN_LENGTH} characters)")
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"is too long (maximum is {MAX_PASSWORD_BYTES} bytes)")
        return v

    @model_validator(mode="after")
    def check_confirmation(self) -> "UserForm":
        if self.password is not None and self.password_confirmation is not None:
            if self.password != self.password_confirmation:
                raise ValueError("password_confirmation doesn't match password")
        return self


def _format_errors(exc: ValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        field_name = ".".join(str(part) for part in error["loc"])
        cause = error.get("ctx", {}).get("error")
        text = str(cause) if cause is not None else error["msg"]
        messages.append(f"{field_name} {text}" if field_name else text)
    return messages


def validate_user(user: User, settings: Settings, require_password: bool = False) -> list[str]:
    """Validate a user's fields. Returns list of error messages, empty if valid."""
    data = {
        "name": user.name,
        "email": user.email,
        "password": user.password,
        "password_confirmation": user.password_confirmation,
    }
    try:
        UserForm.model_validate(data, context={"settings": settings, "require_password": require_password})
    except ValidationError as exc:
        return _format_errors(exc)
    return []
