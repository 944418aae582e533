"""
In-memory throttle store.

Scoped to one process and owned by whoever constructs it; the service
container keeps a single instance per app.
"""

import threading
from datetime import datetime, timedelta
from typing import Optional

from .interfaces import IThrottleStore
from .models import ThrottleEntry


class InMemoryThrottleStore(IThrottleStore):
    """Thread-safe dict-backed counter store."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, ThrottleEntry] = {}

    async def get(self, key: str) -> Optional[ThrottleEntry]:
        with self._lock:
            return self._entries.get(key)

    async def record_failure(
        self,
        key: str,
        now: datetime,
        window: timedelta,
    ) -> ThrottleEntry:
        with self._lock:
            current = self._entries.get(key)
            if current is None or not current.window_open(now, window):
                entry = ThrottleEntry(key=key, attempts=1, window_start=now)
            else:
                entry = current.model_copy(update={"attempts": current.attempts + 1})
            self._entries[key] = entry
            return entry

    async def reset(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    async def purge(self, older_than: datetime) -> int:
        with self._lock:
            stale = [
                key for key, entry in self._entries.items()
                if entry.window_start <= older_than
            ]
            for key in stale:
                del self._entries[key]
            return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
