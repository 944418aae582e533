"""
Access token module.

Issues and validates short-lived HS256-signed JWT access tokens.

Public API:
- ITokenIssuer: Interface for token issuance and validation
- TokenIssuer: PyJWT implementation
- AccessTokenClaims, ValidToken, InvalidToken: Claim and result models
"""

from .interfaces import ITokenIssuer
from .models import AccessTokenClaims, ValidToken, InvalidToken, TokenValidation
from .service import TokenIssuer

__all__ = [
    "ITokenIssuer",
    "TokenIssuer",
    "AccessTokenClaims",
    "ValidToken",
    "InvalidToken",
    "TokenValidation",
]
