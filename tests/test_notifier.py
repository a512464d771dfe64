"""Tests for the logging notifier."""

import logging

from accounts import configure_logging
from accounts.models.user import User
from accounts.services.notifier import LoggingNotifier


class TestLoggingNotifier:
    """Tests for console account links."""

    def test_activation_link_logged(self, caplog):
        """Activation link carries the plaintext token and email."""
        notifier = LoggingNotifier("http://localhost:3000/")
        user = User(id=1, name="Ann", email="ann+test@example.com")

        with caplog.at_level(logging.INFO, logger="accounts"):
            notifier.send_activation(user, "tok-123")

        assert "ACCOUNT ACTIVATION: http://localhost:3000/account_activations/tok-123/edit?email=ann%2Btest%40example.com" in caplog.text

    def test_reset_link_logged(self, caplog):
        """Reset link carries the plaintext token."""
        notifier = LoggingNotifier("https://accounts.example.com")
        user = User(id=1, name="Ann", email="ann@example.com")

        with caplog.at_level(logging.INFO, logger="accounts"):
            notifier.send_password_reset(user, "reset_tok")

        assert "PASSWORD RESET: https://accounts.example.com/password_resets/reset_tok/edit?email=ann%40example.com" in caplog.text


class TestConfigureLogging:
    """Tests for logging setup."""

    def test_returns_accounts_logger(self):
        assert configure_logging().name == "accounts"
