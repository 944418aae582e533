"""
Tests for shared models.
"""

import pytest
from pydantic import ValidationError

from shared.models import AuthenticatedUser, MessageResponse


class TestAuthenticatedUser:
    """Tests for the AuthenticatedUser model in shared."""

    def test_create_with_required_fields(self):
        """Should create user with only required fields."""
        user = AuthenticatedUser(id="user-123", email="test@example.com", token_id="jti-1")
        assert user.id == "user-123"
        assert user.roles == ()

    def test_is_immutable(self):
        """Should reject attribute assignment."""
        user = AuthenticatedUser(id="user-123", email="test@example.com", token_id="jti-1")
        with pytest.raises(ValidationError):
            user.email = "other@example.com"

    def test_has_any_role(self):
        """Should match when at least one role is held."""
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
            roles=("User", "Admin"),
            token_id="jti-1",
        )
        assert user.has_any_role("Admin")
        assert user.has_any_role("Guest", "User")
        assert not user.has_any_role("Guest")
        assert not user.has_any_role()

    def test_requires_token_id(self):
        """Should fail without the token ID."""
        with pytest.raises(ValidationError):
            AuthenticatedUser(id="user-123", email="test@example.com")


class TestMessageResponse:
    def test_serializes_message(self):
        assert MessageResponse(message="ok").model_dump() == {"message": "ok"}
