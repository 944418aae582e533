"""
In-memory account store.
"""

import threading
import uuid
from datetime import datetime
from typing import Optional

from .exceptions import EmailAlreadyRegisteredError
from .interfaces import IAccountStore
from .models import Account, AccountRole, Role, normalize_email

DEFAULT_ROLES = (
    ("Admin", "Full system access"),
    ("User", "Standard user access"),
    ("Guest", "Limited read-only access"),
)


class InMemoryAccountStore(IAccountStore):
    """
    Thread-safe account store for development and tests.

    Seeded with the default role catalog. Email uniqueness is enforced
    under the lock, mirroring a unique index.
    """

    def __init__(self, roles: tuple[tuple[str, str], ...] = DEFAULT_ROLES) -> None:
        self._lock = threading.Lock()
        self._accounts: dict[str, Account] = {}
        self._ids_by_email: dict[str, str] = {}
        self._roles: dict[str, Role] = {
            name: Role(id=str(uuid.uuid4()), name=name, description=description)
            for name, description in roles
        }
        self._assignments: dict[tuple[str, str], AccountRole] = {}

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        with self._lock:
            return self._accounts.get(account_id)

    async def get_by_email(self, email: str) -> Optional[Account]:
        with self._lock:
            account_id = self._ids_by_email.get(normalize_email(email))
            return self._accounts.get(account_id) if account_id else None

    async def create(self, account: Account) -> Account:
        email = normalize_email(account.email)
        with self._lock:
            if email in self._ids_by_email:
                raise EmailAlreadyRegisteredError()
            stored = account.model_copy(update={"email": email})
            self._accounts[stored.id] = stored
            self._ids_by_email[email] = stored.id
            return stored

    async def update_last_login(self, account_id: str, at: datetime) -> None:
        self._update(account_id, last_login_at=at, updated_at=at)

    async def update_password_hash(self, account_id: str, password_hash: str, at: datetime) -> None:
        self._update(account_id, password_hash=password_hash, updated_at=at)

    async def get_role_by_name(self, name: str) -> Optional[Role]:
        return self._roles.get(name)

    async def get_role_names(self, account_id: str) -> list[str]:
        with self._lock:
            role_ids = {role_id for acc_id, role_id in self._assignments if acc_id == account_id}
        return sorted(role.name for role in self._roles.values() if role.id in role_ids)

    async def add_role_assignment(self, account_id: str, role_id: str, at: datetime) -> bool:
        with self._lock:
            key = (account_id, role_id)
            if key in self._assignments:
                return False
            self._assignments[key] = AccountRole(account_id=account_id, role_id=role_id, assigned_at=at)
            return True

    async def ping(self) -> None:
        return None

    def assignments(self) -> list[AccountRole]:
        """Snapshot of assignment records."""
        with self._lock:
            return list(self._assignments.values())

    def _update(self, account_id: str, **changes) -> None:
        with self._lock:
            account = self._accounts.get(account_id)
            if account is not None:
                self._accounts[account_id] = account.model_copy(update=changes)
