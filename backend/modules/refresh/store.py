"""
In-memory refresh token store.

Used for development and tests. A single lock guards the token map and
no awaits happen while it is held, so a rotation cannot be interrupted
half way by task cancellation.
"""

import threading
import uuid
from datetime import datetime
from typing import Optional

from .interfaces import IRefreshTokenStore
from .models import RefreshToken


class InMemoryRefreshTokenStore(IRefreshTokenStore):
    """Thread-safe dict-backed refresh token store."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tokens: dict[str, RefreshToken] = {}

    async def add(self, token: RefreshToken) -> None:
        with self._lock:
            self._tokens[token.token_hash] = token

    async def get(self, token_hash: str) -> Optional[RefreshToken]:
        with self._lock:
            return self._tokens.get(token_hash)

    async def rotate(
        self,
        old_hash: str,
        new_hash: str,
        now: datetime,
        expires_at: datetime,
    ) -> Optional[RefreshToken]:
        with self._lock:
            current = self._tokens.get(old_hash)
            if current is None or not current.is_usable(now):
                return None

            self._tokens[old_hash] = current.model_copy(update={"revoked": True})
            replacement = RefreshToken(
                id=str(uuid.uuid4()),
                account_id=current.account_id,
                token_hash=new_hash,
                created_at=now,
                expires_at=expires_at,
            )
            self._tokens[new_hash] = replacement
            return replacement

    async def revoke_all(self, account_id: str) -> int:
        with self._lock:
            active = [
                key for key, token in self._tokens.items()
                if token.account_id == account_id and not token.revoked
            ]
            for key in active:
                self._tokens[key] = self._tokens[key].model_copy(update={"revoked": True})
            return len(active)
