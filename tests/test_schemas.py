"""Tests for user field validation."""

import pytest

from accounts.config import Settings
from accounts.models.user import User
from accounts.schemas.user import validate_user


@pytest.fixture(name="limits")
def limits_fixture():
    return Settings(
        USER_NAME_MAX_LENGTH=10,
        USER_EMAIL_MIN_LENGTH=6,
        USER_EMAIL_MAX_LENGTH=30,
        PASSWORD_MIN_LENGTH=6,
    )


class TestName:
    """Tests for name rules."""

    def test_valid(self, limits: Settings):
        assert validate_user(User(name="Ann", email="ann@example.com"), limits) == []

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank(self, limits: Settings, name: str):
        assert validate_user(User(name=name, email="ann@example.com"), limits) == ["name can't be blank"]

    def test_too_long(self, limits: Settings):
        errors = validate_user(User(name="a" * 11, email="ann@example.com"), limits)
        assert errors == ["name is too long (maximum is 10 characters)"]


class TestEmail:
    """Tests for email rules."""

    @pytest.mark.parametrize(
        "email",
        ["user@example.com", "USER@foo.COM", "A_US-ER@foo.bar.org", "first.last@foo.jp", "alice+bob@baz.cn"],
    )
    def test_valid_addresses(self, limits: Settings, email: str):
        assert validate_user(User(name="Ann", email=email), limits) == []

    @pytest.mark.parametrize(
        "email",
        ["user@example,com", "user_at_foo.org", "user.name@example.", "foo@bar_baz.com", "foo@bar+baz.com"],
    )
    def test_invalid_addresses(self, limits: Settings, email: str):
        assert validate_user(User(name="Ann", email=email), limits) == ["email is invalid"]

    def test_too_short(self, limits: Settings):
        assert validate_user(User(name="Ann", email="a@b.c"), limits) == [
            "email is too short (minimum is 6 characters)"
        ]

    def test_too_long(self, limits: Settings):
        errors = validate_user(User(name="Ann", email="a" * 20 + "@example.com"), limits)
        assert errors == ["email is too long (maximum is 30 characters)"]

    def test_custom_pattern(self):
        """The email pattern comes from settings."""
        settings = Settings(EMAIL_REGEX=r"^[^@]+@example\.org$")
        assert validate_user(User(name="Ann", email="ann@example.org"), settings) == []
        assert validate_user(User(name="Ann", email="ann@example.com"), settings) == ["email is invalid"]


class TestPassword:
    """Tests for password rules."""

    def test_optional_on_update(self, limits: Settings):
        """No password supplied is fine unless required."""
        assert validate_user(User(name="Ann", email="ann@example.com"), limits) == []

    def test_required(self, limits: Settings):
        errors = validate_user(User(name="Ann", email="ann@example.com"), limits, require_password=True)
        assert errors == ["password can't be blank"]

    def test_blank(self, limits: Settings):
        user = User(name="Ann", email="ann@example.com", password="      ")
        assert validate_user(user, limits) == ["password can't be blank"]

    def test_too_short(self, limits: Settings):
        user = User(name="Ann", email="ann@example.com", password="abcde")
        assert validate_user(user, limits) == ["password is too short (minimum is 6 characters)"]

    def test_too_many_bytes(self, limits: Settings):
        """Passwords over 72 bytes are rejected."""
        user = User(name="Ann", email="ann@example.com", password="é" * 37)
        assert validate_user(user, limits) == ["password is too long (maximum is 72 bytes)"]

    def test_confirmation_mismatch(self, limits: Settings):
        user = User(name="Ann", email="ann@example.com", password="abcdef", password_confirmation="abcdeg")
        assert validate_user(user, limits) == ["password_confirmation doesn't match password"]

    def test_confirmation_match(self, limits: Settings):
        user = User(name="Ann", email="ann@example.com", password="abcdef", password_confirmation="abcdef")
        assert validate_user(user, limits) == []
