"""
Login throttle.

Gate for the login endpoint, keyed by client IP:

1. check() runs before any credential work and raises while the key has
   reached the failure threshold inside its window.
2. record_failure() counts an unauthorized outcome.
3. record_success() clears the key.

Entries older than twice the window are purged opportunistically from
check().
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Optional

from shared.clock import Clock, SystemClock

from .exceptions import LoginThrottledError
from .interfaces import IThrottleStore
from .models import ThrottleEntry

logger = logging.getLogger(__name__)

PURGE_INTERVAL = timedelta(minutes=1)


class LoginThrottle:
    """Fixed-window failed-login limiter."""

    def __init__(
        self,
        store: IThrottleStore,
        max_attempts: int = 5,
        window: timedelta = timedelta(minutes=15),
        clock: Optional[Clock] = None,
    ):
        self._store = store
        self._max_attempts = max_attempts
        self._window = window
        self._clock = clock or SystemClock()
        self._last_purge: Optional[datetime] = None

    @staticmethod
    def key_for(client_ip: Optional[str]) -> str:
        """Throttle key for a client address."""
        return f"login:{client_ip or 'unknown'}"

    async def check(self, key: str) -> None:
        """
        Reject the attempt if the key is locked out.

        Raises:
            LoginThrottledError: With the seconds left until the window ends
        """
        now = self._clock.now()
        await self._maybe_purge(now)

        entry = await self._store.get(key)
        if entry is None or entry.attempts < self._max_attempts:
            return
        if not entry.window_open(now, self._window):
            return

        remaining = (entry.window_start + self._window - now).total_seconds()
        logger.warning("Login rate limit exceeded for %s", key)
        raise LoginThrottledError(
            retry_after=max(1, math.ceil(remaining)),
            window_minutes=int(self._window.total_seconds() // 60),
        )

    async def record_failure(self, key: str) -> ThrottleEntry:
        """Count a failed login for the key."""
        entry = await self._store.record_failure(key, self._clock.now(), self._window)
        if entry.attempts >= self._max_attempts:
            logger.warning("Login lockout triggered for %s after %d failures", key, entry.attempts)
        return entry

    async def record_success(self, key: str) -> None:
        """A successful login clears the key."""
        await self._store.reset(key)

    async def _maybe_purge(self, now: datetime) -> None:
        if self._last_purge is not None and now - self._last_purge < PURGE_INTERVAL:
            return
        self._last_purge = now
        purged = await self._store.purge(now - 2 * self._window)
        if purged:
            logger.debug("Purged %d stale throttle entries", purged)
