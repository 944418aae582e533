"""
Authentication coordinator.

Registration, login and password change. Every outcome is audited;
the audit write never holds up or fails the response.

Login failures are indistinguishable to the caller: unknown email,
inactive account and wrong password all raise InvalidCredentialsError,
and an unknown email still pays for one hash verification. Only the
audit trail records which case it was.
"""

import asyncio
import logging
import secrets
import uuid
from typing import Optional

from shared.clock import Clock, SystemClock
from modules.accounts.exceptions import AccountNotFoundError, EmailAlreadyRegisteredError
from modules.accounts.interfaces import IAccountStore
from modules.accounts.models import Account, AccountProfile, normalize_email
from modules.audit.models import AuditAction, ClientContext
from modules.audit.service import AuditRecorder
from modules.passwords.interfaces import IPasswordHasher
from modules.refresh.service import RefreshTokenLedger
from modules.tokens.interfaces import ITokenIssuer

from .exceptions import IncorrectPasswordError, InvalidCredentialsError
from .models import AuthResponse, ChangePasswordRequest, RegisterRequest

logger = logging.getLogger(__name__)


class AuthCoordinator:
    """Registers accounts and exchanges credentials for token pairs."""

    def __init__(
        self,
        accounts: IAccountStore,
        hasher: IPasswordHasher,
        tokens: ITokenIssuer,
        ledger: RefreshTokenLedger,
        audit: AuditRecorder,
        clock: Optional[Clock] = None,
        default_role: str = "User",
    ):
        self._accounts = accounts
        self._hasher = hasher
        self._tokens = tokens
        self._ledger = ledger
        self._audit = audit
        self._clock = clock or SystemClock()
        self._default_role = default_role
        self._dummy_hash: Optional[str] = None

    async def register(self, request: RegisterRequest, client: ClientContext) -> AuthResponse:
        """
        Create an account and sign it in.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken, including
                when a concurrent registration wins the race
        """
        email = normalize_email(request.email)
        if await self._accounts.get_by_email(email) is not None:
            self._audit.record(
                AuditAction.REGISTER,
                success=False,
                client=client,
                error_message="Email already registered",
            )
            raise EmailAlreadyRegisteredError()

        password_hash = await asyncio.to_thread(self._hasher.hash, request.password)
        now = self._clock.now()
        try:
            account = await self._accounts.create(
                Account(
                    id=str(uuid.uuid4()),
                    email=email,
                    password_hash=password_hash,
                    first_name=request.first_name,
                    last_name=request.last_name,
                    created_at=now,
                    updated_at=now,
                )
            )
        except EmailAlreadyRegisteredError:
            self._audit.record(
                AuditAction.REGISTER,
                success=False,
                client=client,
                error_message="Email already registered",
            )
            raise

        role = await self._accounts.get_role_by_name(self._default_role)
        if role is not None:
            await self._accounts.add_role_assignment(account.id, role.id, now)

        roles = await self._accounts.get_role_names(account.id)
        self._audit.record(AuditAction.REGISTER, success=True, account_id=account.id, client=client)
        logger.info("Registered account %s", account.id)
        return await self._issue(account, roles)

    async def login(self, email: str, password: str, client: ClientContext) -> AuthResponse:
        """
        Verify credentials and issue a token pair.

        Raises:
            InvalidCredentialsError: For every kind of credential failure
        """
        account = await self._accounts.get_by_email(email)
        if account is None:
            await asyncio.to_thread(self._hasher.verify, password, await self._get_dummy_hash())
            self._reject_login(None, "User not found", client)

        password_ok = await asyncio.to_thread(self._hasher.verify, password, account.password_hash)
        if not account.is_active:
            self._reject_login(account.id, "Account is inactive", client)
        if not password_ok:
            self._reject_login(account.id, "Invalid password", client)

        now = self._clock.now()
        if self._hasher.needs_rehash(account.password_hash):
            upgraded = await asyncio.to_thread(self._hasher.hash, password)
            await self._accounts.update_password_hash(account.id, upgraded, now)
            logger.info("Upgraded password hash for account %s", account.id)

        await self._accounts.update_last_login(account.id, now)
        account = account.model_copy(update={"last_login_at": now, "updated_at": now})

        roles = await self._accounts.get_role_names(account.id)
        self._audit.record(AuditAction.LOGIN, success=True, account_id=account.id, client=client)
        return await self._issue(account, roles)

    async def change_password(
        self,
        account_id: str,
        request: ChangePasswordRequest,
        client: ClientContext,
    ) -> None:
        """
        Replace the password of a signed-in account.

        Raises:
            AccountNotFoundError: If the account no longer exists
            IncorrectPasswordError: If the current password does not match
        """
        account = await self._accounts.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        if not await asyncio.to_thread(self._hasher.verify, request.current_password, account.password_hash):
            self._audit.record(
                AuditAction.PASSWORD_CHANGE,
                success=False,
                account_id=account_id,
                client=client,
                error_message="Current password incorrect",
            )
            raise IncorrectPasswordError()

        password_hash = await asyncio.to_thread(self._hasher.hash, request.new_password)
        await self._accounts.update_password_hash(account_id, password_hash, self._clock.now())
        self._audit.record(AuditAction.PASSWORD_CHANGE, success=True, account_id=account_id, client=client)

    async def _issue(self, account: Account, roles: list[str]) -> AuthResponse:
        access_token = self._tokens.issue_access_token(account.id, account.email, roles)
        refresh_token = await self._ledger.issue(account.id)
        return AuthResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self._tokens.expires_in,
            user=AccountProfile.from_account(account, roles),
        )

    def _reject_login(self, account_id: Optional[str], reason: str, client: ClientContext) -> None:
        self._audit.record(
            AuditAction.LOGIN,
            success=False,
            account_id=account_id,
            client=client,
            error_message=reason,
        )
        raise InvalidCredentialsError()

    async def _get_dummy_hash(self) -> str:
        """Hash verified against when the email is unknown."""
        if self._dummy_hash is None:
            self._dummy_hash = await asyncio.to_thread(self._hasher.hash, secrets.token_urlsafe(16))
        return self._dummy_hash
