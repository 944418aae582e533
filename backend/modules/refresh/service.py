"""
Refresh token ledger.

Issues opaque refresh tokens, rotates them on use and revokes them on
logout. Token values are 512 random bits, base64-encoded; only their
SHA-256 digest reaches the store.
"""

import base64
import hashlib
import logging
import secrets
import uuid
from datetime import timedelta
from typing import Optional

from shared.clock import Clock, SystemClock

from .exceptions import InvalidRefreshTokenError
from .interfaces import IRefreshTokenStore
from .models import RefreshToken, RotatedToken

logger = logging.getLogger(__name__)

TOKEN_BYTES = 64


def generate_token() -> str:
    """Generate a new opaque token value."""
    return base64.b64encode(secrets.token_bytes(TOKEN_BYTES)).decode("ascii")


def hash_token(token: str) -> str:
    """Digest under which a token value is stored."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class RefreshTokenLedger:
    """
    Refresh token lifecycle: issue, rotate, revoke.

    State per token is Active -> Revoked (terminal). Expiry is not a
    stored state; it is checked at lookup time.
    """

    def __init__(
        self,
        store: IRefreshTokenStore,
        ttl: timedelta = timedelta(days=7),
        clock: Optional[Clock] = None,
    ):
        self._store = store
        self._ttl = ttl
        self._clock = clock or SystemClock()

    async def issue(self, account_id: str) -> str:
        """
        Issue a new refresh token for an account.

        Returns:
            The raw token value (never stored)
        """
        now = self._clock.now()
        token = generate_token()
        await self._store.add(
            RefreshToken(
                id=str(uuid.uuid4()),
                account_id=account_id,
                token_hash=hash_token(token),
                created_at=now,
                expires_at=now + self._ttl,
            )
        )
        return token

    async def rotate(self, token: str) -> RotatedToken:
        """
        Exchange a refresh token for a new one.

        The old token is revoked and the new one stored as one atomic
        step in the store. Of two concurrent rotations of the same value
        exactly one succeeds.

        Raises:
            InvalidRefreshTokenError: If the token is unknown, revoked or expired
        """
        if not token:
            raise InvalidRefreshTokenError()

        now = self._clock.now()
        new_token = generate_token()
        expires_at = now + self._ttl

        replacement = await self._store.rotate(
            old_hash=hash_token(token),
            new_hash=hash_token(new_token),
            now=now,
            expires_at=expires_at,
        )
        if replacement is None:
            logger.warning("Rejected refresh token rotation")
            raise InvalidRefreshTokenError()

        return RotatedToken(
            account_id=replacement.account_id,
            token=new_token,
            expires_at=replacement.expires_at,
        )

    async def revoke_all(self, account_id: str) -> int:
        """
        Revoke every active refresh token of an account.

        Idempotent: with nothing to revoke this is a no-op.
        """
        revoked = await self._store.revoke_all(account_id)
        if revoked:
            logger.info("Revoked %d refresh token(s) for account %s", revoked, account_id)
        return revoked
