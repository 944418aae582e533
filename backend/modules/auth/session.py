"""
Session coordinator.

Refresh, introspection and logout. A refresh always mints the access
token from the account's current roles, never from the old token's
claims.
"""

import logging
from typing import Optional

from modules.accounts.interfaces import IAccountStore
from modules.accounts.models import AccountProfile
from modules.audit.models import AuditAction, ClientContext
from modules.audit.service import AuditRecorder
from modules.refresh.exceptions import InvalidRefreshTokenError
from modules.refresh.service import RefreshTokenLedger
from modules.tokens.interfaces import ITokenIssuer

from .models import TokenPair, TokenVerifyResponse

logger = logging.getLogger(__name__)


class SessionCoordinator:
    """Continues and ends sessions."""

    def __init__(
        self,
        accounts: IAccountStore,
        tokens: ITokenIssuer,
        ledger: RefreshTokenLedger,
        audit: AuditRecorder,
    ):
        self._accounts = accounts
        self._tokens = tokens
        self._ledger = ledger
        self._audit = audit

    async def refresh(self, refresh_token: str, client: Optional[ClientContext] = None) -> TokenPair:
        """
        Rotate a refresh token and mint a fresh access token.

        Raises:
            InvalidRefreshTokenError: If the token is unusable, or its
                account is gone or inactive
        """
        try:
            rotated = await self._ledger.rotate(refresh_token)
        except InvalidRefreshTokenError:
            self._audit.record(
                AuditAction.TOKEN_REFRESH,
                success=False,
                client=client,
                error_message="Invalid refresh token",
            )
            raise

        account = await self._accounts.get_by_id(rotated.account_id)
        if account is None or not account.is_active:
            # The replacement was already stored; it must not outlive this call.
            await self._ledger.revoke_all(rotated.account_id)
            logger.warning("Refresh rejected for missing or inactive account %s", rotated.account_id)
            self._audit.record(
                AuditAction.TOKEN_REFRESH,
                success=False,
                account_id=rotated.account_id,
                client=client,
                error_message="Account missing or inactive",
            )
            raise InvalidRefreshTokenError()

        roles = await self._accounts.get_role_names(account.id)
        access_token = self._tokens.issue_access_token(account.id, account.email, roles)
        self._audit.record(AuditAction.TOKEN_REFRESH, success=True, account_id=account.id, client=client)
        return TokenPair(
            access_token=access_token,
            refresh_token=rotated.token,
            expires_in=self._tokens.expires_in,
        )

    async def verify(self, access_token: str, claimed_account_id: str) -> TokenVerifyResponse:
        """
        Introspect an access token on behalf of the account presenting it.

        Valid only when the token validates, its subject is the claimed
        account and that account still exists.
        """
        result = self._tokens.validate(access_token)
        if not result.valid or result.account_id != claimed_account_id:
            return TokenVerifyResponse(valid=False)

        account = await self._accounts.get_by_id(claimed_account_id)
        if account is None:
            return TokenVerifyResponse(valid=False)

        roles = await self._accounts.get_role_names(account.id)
        return TokenVerifyResponse(valid=True, user=AccountProfile.from_account(account, roles))

    async def logout(self, account_id: str, client: Optional[ClientContext] = None) -> int:
        """
        Revoke every refresh token of the account.

        Access tokens already handed out stay valid until they expire.
        """
        revoked = await self._ledger.revoke_all(account_id)
        self._audit.record(AuditAction.LOGOUT, success=True, account_id=account_id, client=client)
        return revoked
