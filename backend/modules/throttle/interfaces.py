"""
Throttle store interface.

Implementations must apply record_failure() atomically per key so that
concurrent failures from one client are never lost.
"""

from datetime import datetime, timedelta
from typing import Optional, Protocol, runtime_checkable

from .models import ThrottleEntry


@runtime_checkable
class IThrottleStore(Protocol):
    """Interface for per-key failed-attempt counters."""

    async def get(self, key: str) -> Optional[ThrottleEntry]:
        """Current entry for a key, if any."""
        ...

    async def record_failure(
        self,
        key: str,
        now: datetime,
        window: timedelta,
    ) -> ThrottleEntry:
        """
        Count one failed attempt.

        Starts a fresh window (attempts = 1) when there is no entry or the
        existing window has elapsed; otherwise increments the counter.
        """
        ...

    async def reset(self, key: str) -> None:
        """Drop the entry for a key."""
        ...

    async def purge(self, older_than: datetime) -> int:
        """Drop entries whose window started at or before ``older_than``."""
        ...
