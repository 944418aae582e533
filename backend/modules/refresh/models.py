"""
Refresh token data models.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class RefreshToken(BaseModel):
    """
    A stored refresh token.

    Only the SHA-256 digest of the token value is persisted. The record
    is never mutated except to flip ``revoked`` from False to True.
    """

    id: str = Field(..., description="Row ID")
    account_id: str = Field(..., description="Owning account ID")
    token_hash: str = Field(..., description="SHA-256 hex digest of the token value")
    created_at: datetime = Field(..., description="Issuance time")
    expires_at: datetime = Field(..., description="Expiry time")
    revoked: bool = Field(default=False, description="Whether the token was revoked")

    def is_usable(self, now: datetime) -> bool:
        """A token is usable while not revoked and not yet expired."""
        return not self.revoked and now < self.expires_at


class RotatedToken(BaseModel):
    """Result of a successful rotation."""

    account_id: str = Field(..., description="Account the rotated chain belongs to")
    token: str = Field(..., description="New refresh token value")
    expires_at: datetime = Field(..., description="Expiry of the new token")
