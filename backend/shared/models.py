"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated caller.

    This model is populated from access-token claims and made available
    to route handlers via dependency injection. It is never read from the
    account store, so role changes show up only after the next refresh.
    """

    id: str = Field(..., description="Account ID")
    email: str = Field(..., description="Account email address")
    roles: tuple[str, ...] = Field(default=(), description="Role names from the token")
    token_id: str = Field(..., description="Unique ID (jti) of the presenting token")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }

    def has_any_role(self, *names: str) -> bool:
        """Whether the caller holds at least one of the given roles."""
        return bool(set(self.roles) & set(names))


class MessageResponse(BaseModel):
    """Plain confirmation body for endpoints with nothing else to return."""

    message: str = Field(..., description="Human-readable outcome")
