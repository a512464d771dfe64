"""Configuration settings for user accounts."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

# token_urlsafe(54) encodes to 72 characters, the most bcrypt will hash
MAX_TOKEN_BYTES = 54


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def _env_optional_int(name: str) -> int | None:
    value = os.getenv(name)
    return int(value) if value else None


class Settings:
    """Account settings loaded from environment variables.

    Keyword arguments override the environment, so callers can build an explicit
    configuration without touching ``os.environ``.
    """

    # User fields
    USER_NAME_MAX_LENGTH: int = int(os.getenv("USER_NAME_MAX_LENGTH", "50"))
    USER_EMAIL_MIN_LENGTH: int = int(os.getenv("USER_EMAIL_MIN_LENGTH", "6"))
    USER_EMAIL_MAX_LENGTH: int = int(os.getenv("USER_EMAIL_MAX_LENGTH", "255"))
    EMAIL_REGEX: str = os.getenv("EMAIL_REGEX", r"^[\w+\-.]+@[a-z\d\-]+(\.[a-z\d\-]+)*\.[a-z]+$")
    PASSWORD_MIN_LENGTH: int = int(os.getenv("PASSWORD_MIN_LENGTH", "6"))

    # Tokens
    PASSWORD_RESET_EXPIRATION_HOURS: int = int(os.getenv("PASSWORD_RESET_EXPIRATION_HOURS", "2"))
    TOKEN_BYTES: int = int(os.getenv("TOKEN_BYTES", "32"))

    # Hashing
    BCRYPT_MIN_COST: bool = _env_bool("BCRYPT_MIN_COST")
    BCRYPT_ROUNDS: int | None = _env_optional_int("BCRYPT_ROUNDS")

    # Application
    APP_BASE_URL: str = os.getenv("APP_BASE_URL", "http://localhost:3000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def __init__(self, **overrides) -> None:
        for key, value in overrides.items():
            if not hasattr(type(self), key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    def validate(self) -> list[str]:
        """Validate settings and return list of errors."""
        errors = []
        if self.TOKEN_BYTES < 16:
            errors.append("TOKEN_BYTES must be at least 16 (128 bits of entropy)")
        if self.TOKEN_BYTES > MAX_TOKEN_BYTES:
            errors.append(f"TOKEN_BYTES must be at most {MAX_TOKEN_BYTES} so tokens fit the 72 byte bcrypt limit")
        if self.USER_EMAIL_MIN_LENGTH > self.USER_EMAIL_MAX_LENGTH:
            errors.append("USER_EMAIL_MIN_LENGTH is greater than USER_EMAIL_MAX_LENGTH")
        if self.PASSWORD_MIN_LENGTH > 72:
            errors.append("PASSWORD_MIN_LENGTH exceeds the 72 byte bcrypt limit")
        if self.PASSWORD_RESET_EXPIRATION_HOURS <= 0:
            errors.append("PASSWORD_RESET_EXPIRATION_HOURS must be positive")
        if self.BCRYPT_ROUNDS is not None and not 4 <= self.BCRYPT_ROUNDS <= 31:
            errors.append("BCRYPT_ROUNDS must be between 4 and 31")
        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
