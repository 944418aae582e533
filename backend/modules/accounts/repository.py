"""
Supabase-backed account repository.

Tables:
- accounts: id, email (unique, stored lowercase), password_hash,
  first_name, last_name, is_active, is_verified, last_login_at,
  created_at, updated_at
- roles: id, name (unique), description
- account_roles: account_id, role_id, assigned_at; primary key
  (account_id, role_id)
"""

from datetime import datetime
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository

from .exceptions import EmailAlreadyRegisteredError
from .interfaces import IAccountStore
from .models import Account, Role, normalize_email

UNIQUE_VIOLATION = "23505"


class AccountRepository(BaseRepository[Account], IAccountStore):
    """
    Account, role and assignment storage in Supabase.

    Unique-index violations on insert are translated to domain results:
    a duplicate email raises EmailAlreadyRegisteredError, a duplicate
    role assignment returns False.
    """

    async def get_by_id(self, account_id: str) -> Optional[Account]:
        result = self._db.table("accounts").select("*").eq("id", account_id).execute()
        row = self._first(result.data)
        return self._map_to_account(row) if row else None

    async def get_by_email(self, email: str) -> Optional[Account]:
        result = (
            self._db.table("accounts")
            .select("*")
            .eq("email", normalize_email(email))
            .execute()
        )
        row = self._first(result.data)
        return self._map_to_account(row) if row else None

    async def create(self, account: Account) -> Account:
        try:
            result = self._db.table("accounts").insert(
                {
                    "id": account.id,
                    "email": normalize_email(account.email),
                    "password_hash": account.password_hash,
                    "first_name": account.first_name,
                    "last_name": account.last_name,
                    "is_active": account.is_active,
                    "is_verified": account.is_verified,
                    "created_at": self._timestamp(account.created_at),
                    "updated_at": self._timestamp(account.updated_at),
                }
            ).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise EmailAlreadyRegisteredError() from e
            raise
        return self._map_to_account(result.data[0])

    async def update_last_login(self, account_id: str, at: datetime) -> None:
        self._db.table("accounts").update(
            {"last_login_at": self._timestamp(at), "updated_at": self._timestamp(at)}
        ).eq("id", account_id).execute()

    async def update_password_hash(self, account_id: str, password_hash: str, at: datetime) -> None:
        self._db.table("accounts").update(
            {"password_hash": password_hash, "updated_at": self._timestamp(at)}
        ).eq("id", account_id).execute()

    async def get_role_by_name(self, name: str) -> Optional[Role]:
        result = self._db.table("roles").select("*").eq("name", name).execute()
        row = self._first(result.data)
        if not row:
            return None
        return Role(id=str(row["id"]), name=row["name"], description=row.get("description"))

    async def get_role_names(self, account_id: str) -> list[str]:
        result = (
            self._db.table("account_roles")
            .select("roles(name)")
            .eq("account_id", account_id)
            .execute()
        )
        return sorted(row["roles"]["name"] for row in result.data or [] if row.get("roles"))

    async def add_role_assignment(self, account_id: str, role_id: str, at: datetime) -> bool:
        try:
            self._db.table("account_roles").insert(
                {
                    "account_id": account_id,
                    "role_id": role_id,
                    "assigned_at": self._timestamp(at),
                }
            ).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                return False
            raise
        return True

    async def ping(self) -> None:
        self._db.table("roles").select("id").limit(1).execute()

    def _map_to_account(self, data: dict[str, Any]) -> Account:
        """Map database row to Account model."""
        return Account(
            id=str(data["id"]),
            email=data["email"],
            password_hash=data["password_hash"],
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            is_active=bool(data.get("is_active", True)),
            is_verified=bool(data.get("is_verified", False)),
            last_login_at=data.get("last_login_at"),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
