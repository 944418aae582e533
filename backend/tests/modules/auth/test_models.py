"""Tests for auth request validation."""

import pytest
from pydantic import ValidationError

from modules.auth import RegisterRequest, ResetToken
from modules.auth.models import check_password_strength


class TestPasswordStrength:
    def test_accepts_strong_password(self):
        assert check_password_strength("Passw0rd!") == "Passw0rd!"

    @pytest.mark.parametrize(
        "password,message",
        [
            ("Pa0!", "at least 8 characters"),
            ("passw0rd!", "uppercase"),
            ("PASSW0RD!", "lowercase"),
            ("Password!", "number"),
            ("Passw0rdd", "special character"),
        ],
    )
    def test_rejects_weak_password(self, password, message):
        with pytest.raises(ValueError, match=message):
            check_password_strength(password)


class TestRegisterRequest:
    def test_valid(self):
        request = RegisterRequest(email="a@x.com", password="Passw0rd!", first_name="Ada")
        assert request.email == "a@x.com"
        assert request.last_name is None

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="not-an-email", password="Passw0rd!")

    def test_weak_password(self):
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(email="a@x.com", password="password")
        assert "uppercase" in str(exc_info.value)

    def test_name_too_long(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="a@x.com", password="Passw0rd!", first_name="x" * 101)


class TestResetToken:
    def _token(self, clock, **overrides):
        fields = dict(
            id="r-1",
            account_id="acc-1",
            token_hash="h",
            created_at=clock.now(),
            expires_at=clock.advance(hours=1),
        )
        fields.update(overrides)
        return ResetToken(**fields)

    def test_usable_before_expiry(self, clock):
        token = self._token(clock)
        assert token.is_usable(token.created_at)

    def test_not_usable_at_expiry(self, clock):
        token = self._token(clock)
        assert not token.is_usable(token.expires_at)

    def test_not_usable_once_used(self, clock):
        token = self._token(clock, used=True)
        assert not token.is_usable(token.created_at)
