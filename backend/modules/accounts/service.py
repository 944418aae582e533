"""
Account service implementation.

Admin account lookups and role assignment. Registration and
credential changes live in the auth module.
"""

import logging
from typing import Optional

from shared.clock import Clock, SystemClock

from .exceptions import AccountNotFoundError
from .interfaces import IAccountStore
from .models import AccountDetail

logger = logging.getLogger(__name__)


class AccountService:
    """Account lookups and role management."""

    def __init__(self, store: IAccountStore, clock: Optional[Clock] = None):
        self._store = store
        self._clock = clock or SystemClock()

    async def get_detail(self, account_id: str) -> AccountDetail:
        """
        Get the admin view of an account.

        Raises:
            AccountNotFoundError: If no account has this ID
        """
        account = await self._store.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        roles = await self._store.get_role_names(account_id)
        return AccountDetail.from_account(account, roles)

    async def assign_role(self, account_id: str, role_name: str) -> bool:
        """
        Assign a role by name.

        Returns:
            False when the account or role does not exist, or the account
            already holds the role. Never creates a duplicate assignment.
        """
        account = await self._store.get_by_id(account_id)
        if account is None:
            return False

        role = await self._store.get_role_by_name(role_name)
        if role is None:
            return False

        assigned = await self._store.add_role_assignment(account_id, role.id, self._clock.now())
        if assigned:
            logger.info("Assigned role %s to account %s", role_name, account_id)
        return assigned
