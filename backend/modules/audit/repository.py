"""
Supabase-backed audit repository.

Table ``audit_entries``: id, account_id (nullable), action, ip_address,
user_agent, success, error_message, created_at. Rows are inserted, never
updated.
"""

from typing import Any

from shared.repository import BaseRepository

from .interfaces import IAuditStore
from .models import AuditAction, AuditEntry

TABLE = "audit_entries"


class AuditRepository(BaseRepository[AuditEntry], IAuditStore):
    """Audit storage in Supabase."""

    async def append(self, entry: AuditEntry) -> None:
        self._db.table(TABLE).insert(
            {
                "id": entry.id,
                "account_id": entry.account_id,
                "action": entry.action.value,
                "ip_address": entry.ip_address,
                "user_agent": entry.user_agent,
                "success": entry.success,
                "error_message": entry.error_message,
                "created_at": self._timestamp(entry.created_at),
            }
        ).execute()

    async def list_for_account(
        self,
        account_id: str,
        page: int = 1,
        page_size: int = 50,
    ) -> list[AuditEntry]:
        offset = (page - 1) * page_size
        result = (
            self._db.table(TABLE)
            .select("*")
            .eq("account_id", account_id)
            .order("created_at", desc=True)
            .range(offset, offset + page_size - 1)
            .execute()
        )
        return [self._map_to_entry(row) for row in result.data or []]

    def _map_to_entry(self, data: dict[str, Any]) -> AuditEntry:
        """Map database row to AuditEntry model."""
        return AuditEntry(
            id=str(data["id"]),
            account_id=str(data["account_id"]) if data.get("account_id") else None,
            action=AuditAction(data["action"]),
            ip_address=data.get("ip_address"),
            user_agent=data.get("user_agent"),
            success=bool(data["success"]),
            error_message=data.get("error_message"),
            created_at=data["created_at"],
        )
