"""Account notification delivery."""

import logging
from abc import ABC, abstractmethod
from urllib.parse import quote, urlencode

from accounts.models.user import User

logger = logging.getLogger("accounts")


class Notifier(ABC):
    """Sends activation and password reset messages carrying a plaintext token."""

    @abstractmethod
    def send_activation(self, user: User, token: str) -> None:
        pass

    @abstractmethod
    def send_password_reset(self, user: User, token: str) -> None:
        pass


class LoggingNotifier(Notifier):
    """Logs account links to the server console instead of sending mail."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")

    def activation_url(self, user: User, token: str) -> str:
        return f"{self.base_url}/account_activations/{quote(token)}/edit?{urlencode({'email': user.email})}"

    def password_reset_url(self, user: User, token: str) -> str:
        return f"{self.base_url}/password_resets/{quote(token)}/edit?{urlencode({'email': user.email})}"

    def send_activation(self, user: User, token: str) -> None:
        logger.info("ACCOUNT ACTIVATION: %s", self.activation_url(user, token))

    def send_password_reset(self, user: User, token: str) -> None:
        logger.info("PASSWORD RESET: %s", self.password_reset_url(user, token))
