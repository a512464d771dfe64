"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from accounts.config import Settings
from accounts.services.accounts import AccountService
from accounts.services.credentials import CredentialManager
from accounts.services.notifier import Notifier
from accounts.services.user_store import InMemoryUserStore


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(name="settings")
def settings_fixture():
    """Settings with the lowest bcrypt cost to keep tests fast."""
    return Settings(BCRYPT_MIN_COST=True, BCRYPT_ROUNDS=None, PASSWORD_RESET_EXPIRATION_HOURS=2)


@pytest.fixture(name="clock")
def clock_fixture():
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture(name="store")
def store_fixture(clock: FakeClock):
    return InMemoryUserStore(clock=clock)


@pytest.fixture(name="notifier")
def notifier_fixture():
    return MagicMock(spec=Notifier)


@pytest.fixture(name="manager")
def manager_fixture(settings: Settings, store: InMemoryUserStore, notifier: MagicMock, clock: FakeClock):
    return CredentialManager(settings, store, notifier, clock=clock)


@pytest.fixture(name="service")
def service_fixture(manager: CredentialManager):
    return AccountService(manager)


@pytest.fixture(name="test_user")
def test_user_fixture(manager: CredentialManager):
    """Create and activate a test user. The plaintext password is password123."""
    user = manager.create_user("Test User", "test@example.com", "password123", "password123")
    manager.activate(user)
    return user
