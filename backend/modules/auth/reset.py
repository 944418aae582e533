"""
Password reset flow.

1. request_reset() issues a single-use token when the email belongs to
   an active account and hands it to the notifier. The caller gets the
   same answer either way.
2. confirm_reset() consumes the token, stores the new password hash and
   revokes every refresh token of the account.

Reset tokens are URL-safe so they can travel in the confirmation path;
only their SHA-256 digest is stored.
"""

import asyncio
import logging
import secrets
import uuid
from datetime import datetime, timedelta
from typing import Optional

from shared.clock import Clock, SystemClock
from modules.accounts.interfaces import IAccountStore
from modules.accounts.models import Account
from modules.audit.models import AuditAction, ClientContext
from modules.audit.service import AuditRecorder
from modules.passwords.interfaces import IPasswordHasher
from modules.refresh.service import RefreshTokenLedger, hash_token

from .exceptions import InvalidResetTokenError
from .interfaces import IResetNotifier, IResetTokenStore
from .models import ResetToken

logger = logging.getLogger(__name__)


class LoggingResetNotifier(IResetNotifier):
    """Notifier that only logs that a reset was issued. Never logs the token."""

    async def send(self, account: Account, token: str, expires_at: datetime) -> None:
        logger.info(
            "Password reset issued for account %s, valid until %s",
            account.id,
            expires_at.isoformat(),
        )


class PasswordResetService:
    """Issues and redeems password reset tokens."""

    def __init__(
        self,
        accounts: IAccountStore,
        hasher: IPasswordHasher,
        ledger: RefreshTokenLedger,
        audit: AuditRecorder,
        store: IResetTokenStore,
        notifier: IResetNotifier,
        ttl: timedelta = timedelta(hours=1),
        clock: Optional[Clock] = None,
    ):
        self._accounts = accounts
        self._hasher = hasher
        self._ledger = ledger
        self._audit = audit
        self._store = store
        self._notifier = notifier
        self._ttl = ttl
        self._clock = clock or SystemClock()

    async def request_reset(self, email: str, client: ClientContext) -> None:
        """Issue a reset token if the email belongs to an active account."""
        account = await self._accounts.get_by_email(email)
        if account is None or not account.is_active:
            return

        now = self._clock.now()
        token = secrets.token_urlsafe(48)
        expires_at = now + self._ttl
        await self._store.add(
            ResetToken(
                id=str(uuid.uuid4()),
                account_id=account.id,
                token_hash=hash_token(token),
                created_at=now,
                expires_at=expires_at,
            )
        )
        await self._notifier.send(account, token, expires_at)
        self._audit.record(
            AuditAction.PASSWORD_RESET_REQUEST,
            success=True,
            account_id=account.id,
            client=client,
        )

    async def confirm_reset(self, token: str, new_password: str, client: ClientContext) -> None:
        """
        Set a new password using a reset token.

        Raises:
            InvalidResetTokenError: If the token is unknown, used, expired,
                or its account is gone or inactive
        """
        now = self._clock.now()
        consumed = await self._store.consume(hash_token(token), now) if token else None
        if consumed is None:
            self._fail(None, "Invalid or expired reset token", client)

        account = await self._accounts.get_by_id(consumed.account_id)
        if account is None or not account.is_active:
            self._fail(consumed.account_id, "Account missing or inactive", client)

        password_hash = await asyncio.to_thread(self._hasher.hash, new_password)
        await self._accounts.update_password_hash(account.id, password_hash, now)
        await self._ledger.revoke_all(account.id)
        self._audit.record(AuditAction.PASSWORD_RESET, success=True, account_id=account.id, client=client)

    def _fail(self, account_id: Optional[str], reason: str, client: ClientContext) -> None:
        self._audit.record(
            AuditAction.PASSWORD_RESET,
            success=False,
            account_id=account_id,
            client=client,
            error_message=reason,
        )
        raise InvalidResetTokenError()
