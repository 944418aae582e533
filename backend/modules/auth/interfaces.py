"""
Authentication module interfaces.

Password reset storage and delivery are pluggable; the coordinators
depend on these protocols, never on concrete implementations.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from modules.accounts.models import Account

from .models import ResetToken


@runtime_checkable
class IResetTokenStore(Protocol):
    """Interface for password reset token storage."""

    async def add(self, token: ResetToken) -> None:
        ...

    async def consume(self, token_hash: str, now: datetime) -> Optional[ResetToken]:
        """
        Mark a usable token as used.

        Check and flip happen as one atomic step: of two concurrent
        calls with the same digest at most one gets the token back.

        Returns:
            The consumed token, or None if it is unknown, used or expired
        """
        ...


@runtime_checkable
class IResetNotifier(Protocol):
    """Delivers a reset token to the account owner."""

    async def send(self, account: Account, token: str, expires_at: datetime) -> None:
        ...
