"""
Refresh token module exceptions.
"""

from shared.exceptions import AuthenticationError


class InvalidRefreshTokenError(AuthenticationError):
    """
    Raised when a refresh token cannot be used.

    Unknown, revoked and expired tokens all raise this same error so the
    caller cannot tell them apart.
    """

    def __init__(self, message: str = "Invalid or expired refresh token"):
        super().__init__(message, code="INVALID_TOKEN")
