"""
Supabase-backed refresh token repository.

Table ``refresh_tokens``: id, account_id, token_hash (unique), created_at,
expires_at, revoked.

Rotation runs in the database through the ``rotate_refresh_token``
Postgres function (migrations/001_auth_schema.sql) so the conditional
revoke and the insert share one transaction. The row lock taken by
``update ... where not revoked`` makes a concurrent second rotation of
the same hash match zero rows.
"""

from datetime import datetime
from typing import Any, Optional

from shared.repository import BaseRepository

from .interfaces import IRefreshTokenStore
from .models import RefreshToken

TABLE = "refresh_tokens"


class RefreshTokenRepository(BaseRepository[RefreshToken], IRefreshTokenStore):
    """Refresh token storage in Supabase."""

    async def add(self, token: RefreshToken) -> None:
        self._db.table(TABLE).insert(
            {
                "id": token.id,
                "account_id": token.account_id,
                "token_hash": token.token_hash,
                "created_at": self._timestamp(token.created_at),
                "expires_at": self._timestamp(token.expires_at),
                "revoked": token.revoked,
            }
        ).execute()

    async def get(self, token_hash: str) -> Optional[RefreshToken]:
        result = self._db.table(TABLE).select("*").eq("token_hash", token_hash).execute()
        row = self._first(result.data)
        return self._map_to_token(row) if row else None

    async def rotate(
        self,
        old_hash: str,
        new_hash: str,
        now: datetime,
        expires_at: datetime,
    ) -> Optional[RefreshToken]:
        result = self._db.rpc(
            "rotate_refresh_token",
            {
                "p_old_hash": old_hash,
                "p_new_hash": new_hash,
                "p_now": self._timestamp(now),
                "p_expires_at": self._timestamp(expires_at),
            },
        ).execute()
        row = self._first(result.data)
        return self._map_to_token(row) if row else None

    async def revoke_all(self, account_id: str) -> int:
        result = (
            self._db.table(TABLE)
            .update({"revoked": True})
            .eq("account_id", account_id)
            .eq("revoked", False)
            .execute()
        )
        return len(result.data or [])

    def _map_to_token(self, data: dict[str, Any]) -> RefreshToken:
        """Map database row to RefreshToken model."""
        return RefreshToken(
            id=str(data["id"]),
            account_id=str(data["account_id"]),
            token_hash=data["token_hash"],
            created_at=data["created_at"],
            expires_at=data["expires_at"],
            revoked=bool(data.get("revoked", False)),
        )
