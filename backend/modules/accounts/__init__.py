"""
Accounts module.

Owns accounts, the role catalog and role assignments. The auth module
reads and writes accounts only through IAccountStore.

Public API:
- IAccountStore: Persistence interface
- InMemoryAccountStore: Process-local implementation seeded with roles
- AccountService: Profile lookup and role assignment
- Account, Role, AccountRole, AccountProfile, AccountDetail: Data models
- Account exceptions: AccountNotFoundError, EmailAlreadyRegisteredError
"""

from .interfaces import IAccountStore
from .models import (
    Account,
    AccountDetail,
    AccountProfile,
    AccountRole,
    AssignRoleRequest,
    Role,
    normalize_email,
)
from .exceptions import AccountNotFoundError, EmailAlreadyRegisteredError
from .service import AccountService
from .store import InMemoryAccountStore, DEFAULT_ROLES

__all__ = [
    # Interface
    "IAccountStore",
    # Implementations
    "InMemoryAccountStore",
    "AccountService",
    "DEFAULT_ROLES",
    # Models
    "Account",
    "AccountDetail",
    "AccountProfile",
    "AccountRole",
    "AssignRoleRequest",
    "Role",
    "normalize_email",
    # Exceptions
    "AccountNotFoundError",
    "EmailAlreadyRegisteredError",
]
