"""
Supabase-backed password reset token repository.

Table ``password_reset_tokens``: id, account_id, token_hash (unique),
created_at, expires_at, used.
"""

from datetime import datetime
from typing import Any, Optional

from shared.repository import BaseRepository

from .interfaces import IResetTokenStore
from .models import ResetToken

TABLE = "password_reset_tokens"


class ResetTokenRepository(BaseRepository[ResetToken], IResetTokenStore):
    """Reset token storage in Supabase."""

    async def add(self, token: ResetToken) -> None:
        self._db.table(TABLE).insert(
            {
                "id": token.id,
                "account_id": token.account_id,
                "token_hash": token.token_hash,
                "created_at": self._timestamp(token.created_at),
                "expires_at": self._timestamp(token.expires_at),
                "used": token.used,
            }
        ).execute()

    async def consume(self, token_hash: str, now: datetime) -> Optional[ResetToken]:
        # One conditional UPDATE: a second caller matches zero rows.
        result = (
            self._db.table(TABLE)
            .update({"used": True})
            .eq("token_hash", token_hash)
            .eq("used", False)
            .gt("expires_at", self._timestamp(now))
            .execute()
        )
        row = self._first(result.data)
        return self._map_to_token(row) if row else None

    def _map_to_token(self, data: dict[str, Any]) -> ResetToken:
        """Map database row to ResetToken model."""
        return ResetToken(
            id=str(data["id"]),
            account_id=str(data["account_id"]),
            token_hash=data["token_hash"],
            created_at=data["created_at"],
            expires_at=data["expires_at"],
            used=bool(data.get("used", False)),
        )
