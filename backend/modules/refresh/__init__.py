"""
Refresh token module.

Stores opaque refresh tokens, rotates them on use and revokes them on
logout. A token is usable while it is not revoked and not expired;
revocation is terminal.

Public API:
- IRefreshTokenStore: Persistence interface (in-memory and Supabase implementations)
- RefreshTokenLedger: Issue / rotate / revoke operations
- RefreshToken, RotatedToken: Data models
- InvalidRefreshTokenError: Uniform rejection for unknown, revoked or expired tokens
"""

from .interfaces import IRefreshTokenStore
from .models import RefreshToken, RotatedToken
from .exceptions import InvalidRefreshTokenError
from .service import RefreshTokenLedger
from .store import InMemoryRefreshTokenStore

__all__ = [
    "IRefreshTokenStore",
    "RefreshTokenLedger",
    "InMemoryRefreshTokenStore",
    "RefreshToken",
    "RotatedToken",
    "InvalidRefreshTokenError",
]
