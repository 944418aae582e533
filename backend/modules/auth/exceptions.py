"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses. Every
credential and token failure carries one fixed message regardless of
the underlying cause.
"""

from shared.exceptions import AuthenticationError, AuthorizationError, ValidationError


class InvalidCredentialsError(AuthenticationError):
    """Raised for an unknown email, an inactive account or a wrong password alike."""

    def __init__(self):
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class InvalidTokenError(AuthenticationError):
    """Raised when an access token fails validation for any reason."""

    def __init__(self):
        super().__init__("Invalid or expired token", code="INVALID_TOKEN")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidResetTokenError(ValidationError):
    """Raised when a password reset token is unknown, used or expired."""

    def __init__(self):
        super().__init__("Invalid or expired reset token", code="INVALID_TOKEN")


class IncorrectPasswordError(ValidationError):
    """Raised when a password change supplies the wrong current password."""

    def __init__(self):
        super().__init__("Current password is incorrect", code="INVALID_PASSWORD")


class InsufficientPermissionsError(AuthorizationError):
    """Raised when the caller holds none of the required roles."""

    def __init__(self, required_roles: list[str]):
        super().__init__(
            "Insufficient permissions",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_roles": required_roles},
        )
