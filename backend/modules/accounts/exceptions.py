"""
Accounts module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError


class AccountNotFoundError(NotFoundError):
    """Raised when an account lookup by ID finds nothing."""

    def __init__(self, account_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": account_id},
        )


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when an email is already taken, including a lost creation race."""

    def __init__(self, message: str = "Email is already registered"):
        super().__init__(message, code="EMAIL_EXISTS")
