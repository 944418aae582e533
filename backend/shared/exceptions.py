"""
Base exception classes for the Gatehouse backend.

Each module defines its own exceptions that inherit from these bases.
The API layer maps each base class to one HTTP status code, so a module
only has to pick the right parent to get the right response.
"""

from typing import Optional, Any


class GatehouseError(Exception):
    """
    Base exception for all Gatehouse errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(GatehouseError):
    """Resource not found."""

    pass


class ValidationError(GatehouseError):
    """Input validation failed."""

    pass


class ConflictError(GatehouseError):
    """Resource already exists."""

    pass


class AuthenticationError(GatehouseError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(GatehouseError):
    """Authorization failed (insufficient permissions)."""

    pass


class ThrottledError(GatehouseError):
    """Too many attempts; the caller should retry later."""

    def __init__(
        self,
        message: str,
        retry_after: int,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.retry_after = retry_after
        self.details["retry_after"] = retry_after


class ConfigurationError(GatehouseError):
    """Required configuration is missing or invalid. Fatal at startup."""

    pass

