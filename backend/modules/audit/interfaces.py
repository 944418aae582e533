"""
Audit persistence interface.
"""

from typing import Protocol, runtime_checkable

from .models import AuditEntry


@runtime_checkable
class IAuditStore(Protocol):
    """Interface for append-only audit storage."""

    async def append(self, entry: AuditEntry) -> None:
        """Persist one entry."""
        ...

    async def list_for_account(
        self,
        account_id: str,
        page: int = 1,
        page_size: int = 50,
    ) -> list[AuditEntry]:
        """Entries of one account, newest first."""
        ...
