"""
Access token data models.

ValidToken / InvalidToken form the internal result of validation. The
reason on InvalidToken is for logs only; the API layer turns every
InvalidToken into the same 401.
"""

from dataclasses import dataclass
from typing import Union

from pydantic import BaseModel, Field


class AccessTokenClaims(BaseModel):
    """Decoded access token payload."""

    sub: str = Field(..., description="Subject (account ID)")
    email: str = Field(..., description="Account email")
    jti: str = Field(..., description="Unique token ID")
    roles: list[str] = Field(default_factory=list, description="Role names")
    iss: str = Field(..., description="Issuer")
    aud: str = Field(..., description="Audience")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")

    model_config = {"extra": "ignore"}


@dataclass(frozen=True)
class ValidToken:
    claims: AccessTokenClaims

    valid = True

    @property
    def account_id(self) -> str:
        return self.claims.sub


@dataclass(frozen=True)
class InvalidToken:
    reason: str

    valid = False


TokenValidation = Union[ValidToken, InvalidToken]
