"""
Time source abstraction.

Everything that compares against "now" (token expiry, throttle windows,
audit timestamps) takes a Clock so tests can move time deterministically.
"""

from datetime import datetime, timezone
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
