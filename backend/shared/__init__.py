"""
Shared infrastructure for the Gatehouse backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- clock: Injectable time source
- database: Supabase client factory
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .clock import Clock, SystemClock
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    GatehouseError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ThrottledError,
    ConfigurationError,
)
from .models import AuthenticatedUser, MessageResponse

__all__ = [
    "Settings",
    "get_settings",
    "Clock",
    "SystemClock",
    "get_supabase_client",
    "reset_client_cache",
    "GatehouseError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "ThrottledError",
    "ConfigurationError",
    "AuthenticatedUser",
    "MessageResponse",
]
