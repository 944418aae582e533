"""
In-memory audit store.
"""

import threading

from .interfaces import IAuditStore
from .models import AuditEntry


class InMemoryAuditStore(IAuditStore):
    """List-backed audit store for development and tests."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[AuditEntry] = []

    async def append(self, entry: AuditEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    async def list_for_account(
        self,
        account_id: str,
        page: int = 1,
        page_size: int = 50,
    ) -> list[AuditEntry]:
        with self._lock:
            matching = [e for e in reversed(self._entries) if e.account_id == account_id]
        offset = (page - 1) * page_size
        return matching[offset : offset + page_size]

    @property
    def entries(self) -> list[AuditEntry]:
        """Snapshot of every entry in insertion order."""
        with self._lock:
            return list(self._entries)
