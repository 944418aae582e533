"""
Refresh token persistence interface.

Any implementation must make rotate() a single atomic step: with two
concurrent calls for the same old hash, exactly one returns a record
and the other returns None.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from .models import RefreshToken


@runtime_checkable
class IRefreshTokenStore(Protocol):
    """Interface for refresh token storage."""

    async def add(self, token: RefreshToken) -> None:
        """Persist a newly issued token."""
        ...

    async def get(self, token_hash: str) -> Optional[RefreshToken]:
        """Look up a token by digest, regardless of state."""
        ...

    async def rotate(
        self,
        old_hash: str,
        new_hash: str,
        now: datetime,
        expires_at: datetime,
    ) -> Optional[RefreshToken]:
        """
        Revoke the old token and store its replacement in one step.

        The old token must exist, be unrevoked and have ``expires_at``
        after ``now``. The replacement belongs to the same account.

        Returns:
            The new token record, or None if the old token was not usable
        """
        ...

    async def revoke_all(self, account_id: str) -> int:
        """
        Revoke every unrevoked token of an account.

        Returns:
            Number of tokens revoked (0 is not an error)
        """
        ...
