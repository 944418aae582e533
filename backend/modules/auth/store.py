"""
In-memory password reset token store.
"""

import threading
from datetime import datetime
from typing import Optional

from .interfaces import IResetTokenStore
from .models import ResetToken


class InMemoryResetTokenStore(IResetTokenStore):
    """Thread-safe dict-backed reset token store."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tokens: dict[str, ResetToken] = {}

    async def add(self, token: ResetToken) -> None:
        with self._lock:
            self._tokens[token.token_hash] = token

    async def consume(self, token_hash: str, now: datetime) -> Optional[ResetToken]:
        with self._lock:
            token = self._tokens.get(token_hash)
            if token is None or not token.is_usable(now):
                return None
            used = token.model_copy(update={"used": True})
            self._tokens[token_hash] = used
            return used
