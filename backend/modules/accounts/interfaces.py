"""
Account store interface.

Other modules depend on IAccountStore, never on a concrete store.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from .models import Account, Role


@runtime_checkable
class IAccountStore(Protocol):
    """Interface for account, role and assignment persistence."""

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        ...

    async def get_by_email(self, email: str) -> Optional[Account]:
        """
        Look up an account by email.

        Args:
            email: Address in any case; compared case-insensitively
        """
        ...

    async def create(self, account: Account) -> Account:
        """
        Insert a new account.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken. The store's
                uniqueness check is authoritative, so this also covers two
                registrations racing past the coordinator's existence check.
        """
        ...

    async def update_last_login(self, account_id: str, at: datetime) -> None:
        ...

    async def update_password_hash(self, account_id: str, password_hash: str, at: datetime) -> None:
        ...

    async def get_role_by_name(self, name: str) -> Optional[Role]:
        ...

    async def get_role_names(self, account_id: str) -> list[str]:
        """Names of every role currently assigned to the account."""
        ...

    async def add_role_assignment(self, account_id: str, role_id: str, at: datetime) -> bool:
        """
        Assign a role.

        Returns:
            False if the account already holds the role, True otherwise
        """
        ...

    async def ping(self) -> None:
        """Raise if the store is unreachable."""
        ...
