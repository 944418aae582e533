"""
Login throttling exceptions.
"""

from shared.exceptions import ThrottledError


class LoginThrottledError(ThrottledError):
    """Raised when a client key is locked out of the login endpoint."""

    def __init__(self, retry_after: int, window_minutes: int):
        super().__init__(
            f"Too many failed login attempts. Please try again after {window_minutes} minutes.",
            retry_after=retry_after,
            code="RATE_LIMIT_EXCEEDED",
        )
