"""Logging setup."""

import logging

from accounts.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Configure root logging from settings and return the accounts logger."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)
    return logging.getLogger("accounts")
