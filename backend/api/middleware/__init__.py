"""Request authentication dependencies."""

from .auth import get_bearer_token, get_current_user, require_roles

__all__ = ["get_bearer_token", "get_current_user", "require_roles"]
