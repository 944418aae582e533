"""
Audit recorder.

record() builds the entry synchronously and hands the write to a
background task, so the caller never waits on (or fails because of) the
audit store. flush() awaits outstanding writes; the app calls it on
shutdown and tests call it before asserting on the store.
"""

import asyncio
import logging
import uuid
from typing import Optional

from shared.clock import Clock, SystemClock

from .interfaces import IAuditStore
from .models import AuditAction, AuditEntry, ClientContext

logger = logging.getLogger(__name__)


class AuditRecorder:
    """Best-effort, non-blocking audit writer."""

    def __init__(self, store: IAuditStore, clock: Optional[Clock] = None):
        self._store = store
        self._clock = clock or SystemClock()
        self._pending: set[asyncio.Task] = set()

    def record(
        self,
        action: AuditAction,
        *,
        success: bool,
        account_id: Optional[str] = None,
        client: Optional[ClientContext] = None,
        error_message: Optional[str] = None,
    ) -> AuditEntry:
        """
        Append one audit entry in the background.

        Returns:
            The entry that was scheduled for writing
        """
        client = client or ClientContext()
        entry = AuditEntry(
            id=str(uuid.uuid4()),
            account_id=account_id,
            action=action,
            ip_address=client.ip_address,
            user_agent=client.user_agent,
            success=success,
            error_message=error_message,
            created_at=self._clock.now(),
        )

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error("No running event loop; dropped audit entry %s", action.value)
            return entry

        task = loop.create_task(self._write(entry))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return entry

    async def flush(self) -> None:
        """Wait for every scheduled write to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def _write(self, entry: AuditEntry) -> None:
        try:
            await self._store.append(entry)
        except Exception:
            logger.exception("Failed to write audit entry %s", entry.action.value)
