"""
Authentication module data models.

Request bodies carry their own validation rules; FastAPI turns a
failure into a 400 VALIDATION_ERROR before any handler runs.
"""

import re
from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, EmailStr, Field

from modules.accounts.models import AccountProfile

PASSWORD_MIN_LENGTH = 8

_PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (re.compile(r"[^a-zA-Z0-9]"), "Password must contain at least one special character"),
)


def check_password_strength(value: str) -> str:
    """Reject passwords that do not meet the complexity rules."""
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(value):
            raise ValueError(message)
    return value


StrongPassword = Annotated[str, AfterValidator(check_password_strength)]


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request to create an account."""

    email: EmailStr = Field(..., description="Email address")
    password: StrongPassword = Field(..., description="Password")
    first_name: Optional[str] = Field(None, max_length=100, description="First name")
    last_name: Optional[str] = Field(None, max_length=100, description="Last name")


class LoginRequest(BaseModel):
    """Request to sign in with email and password."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")


class RefreshRequest(BaseModel):
    """Request to exchange a refresh token."""

    refresh_token: str = Field(..., min_length=1, description="Refresh token")


class PasswordResetRequest(BaseModel):
    """Request a password reset for an email address."""

    email: EmailStr = Field(..., description="Email address")


class PasswordResetConfirmRequest(BaseModel):
    """New password submitted with a reset token."""

    new_password: StrongPassword = Field(..., description="New password")


class ChangePasswordRequest(BaseModel):
    """Password change by a signed-in account."""

    current_password: str = Field(..., min_length=1, description="Current password")
    new_password: StrongPassword = Field(..., description="New password")


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class TokenPair(BaseModel):
    """Access token plus the refresh token that continues the session."""

    access_token: str = Field(..., description="Signed access token")
    refresh_token: str = Field(..., description="Opaque refresh token")
    token_type: str = Field(default="Bearer", description="Authorization scheme")
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class AuthResponse(TokenPair):
    """Token pair with the profile of the account it was issued for."""

    user: AccountProfile = Field(..., description="Signed-in account")


class TokenVerifyResponse(BaseModel):
    """Result of access token introspection."""

    valid: bool = Field(..., description="Whether the token is valid for the caller")
    user: Optional[AccountProfile] = Field(None, description="Account profile if valid")


# -----------------------------------------------------------------------------
# Stored records
# -----------------------------------------------------------------------------


class ResetToken(BaseModel):
    """Single-use password reset token. Only the digest is stored."""

    id: str = Field(..., description="Token record ID")
    account_id: str = Field(..., description="Account the reset is for")
    token_hash: str = Field(..., description="SHA-256 digest of the token value")
    created_at: datetime = Field(..., description="When it was issued")
    expires_at: datetime = Field(..., description="When it stops being accepted")
    used: bool = Field(default=False, description="Whether it was consumed")

    def is_usable(self, now: datetime) -> bool:
        return not self.used and now < self.expires_at
