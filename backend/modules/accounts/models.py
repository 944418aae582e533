"""
Account data models.

Accounts, roles and assignments are flat records keyed by id. An
account's roles are resolved through AccountRole join records, never
embedded in the account.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookups."""
    return email.strip().lower()


class Account(BaseModel):
    """Stored account."""

    id: str = Field(..., description="Account ID (UUID)")
    email: str = Field(..., description="Normalized email address")
    password_hash: str = Field(..., description="argon2id digest")
    first_name: Optional[str] = Field(None, description="First name")
    last_name: Optional[str] = Field(None, description="Last name")
    is_active: bool = Field(default=True, description="Whether login is allowed")
    is_verified: bool = Field(default=False, description="Whether the email is verified")
    last_login_at: Optional[datetime] = Field(None, description="Last successful login")
    created_at: datetime = Field(..., description="Account creation time")
    updated_at: datetime = Field(..., description="Last update time")


class Role(BaseModel):
    """Role catalog entry. Reference data, never mutated."""

    id: str = Field(..., description="Role ID")
    name: str = Field(..., description="Unique role name")
    description: Optional[str] = Field(None, description="What the role grants")

    model_config = {"frozen": True}


class AccountRole(BaseModel):
    """Join record assigning a role to an account."""

    account_id: str
    role_id: str
    assigned_at: datetime

    model_config = {"frozen": True}


class AccountProfile(BaseModel):
    """Account as returned to clients."""

    id: str = Field(..., description="Account ID")
    email: str = Field(..., description="Email address")
    first_name: Optional[str] = Field(None, description="First name")
    last_name: Optional[str] = Field(None, description="Last name")
    is_active: bool = Field(..., description="Whether login is allowed")
    is_verified: bool = Field(..., description="Whether the email is verified")
    roles: list[str] = Field(default_factory=list, description="Assigned role names")
    created_at: datetime = Field(..., description="Account creation time")

    @classmethod
    def from_account(cls, account: Account, roles: list[str]) -> "AccountProfile":
        return cls(
            id=account.id,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            is_active=account.is_active,
            is_verified=account.is_verified,
            roles=sorted(roles),
            created_at=account.created_at,
        )


class AccountDetail(AccountProfile):
    """Admin view of an account."""

    last_login_at: Optional[datetime] = Field(None, description="Last successful login")
    updated_at: datetime = Field(..., description="Last update time")

    @classmethod
    def from_account(cls, account: Account, roles: list[str]) -> "AccountDetail":
        return cls(
            **AccountProfile.from_account(account, roles).model_dump(),
            last_login_at=account.last_login_at,
            updated_at=account.updated_at,
        )


class AssignRoleRequest(BaseModel):
    """Request to assign a role to an account."""

    role_name: str = Field(..., min_length=1, max_length=50, description="Role to assign")
