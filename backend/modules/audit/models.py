"""
Audit data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AuditAction(str, Enum):
    """Audited actions."""

    REGISTER = "Register"
    LOGIN = "Login"
    LOGOUT = "Logout"
    TOKEN_REFRESH = "TokenRefresh"
    PASSWORD_CHANGE = "PasswordChange"
    PASSWORD_RESET_REQUEST = "PasswordResetRequest"
    PASSWORD_RESET = "PasswordReset"


class ClientContext(BaseModel):
    """Where a request came from."""

    ip_address: Optional[str] = Field(None, description="Client IP address")
    user_agent: Optional[str] = Field(None, description="Client User-Agent header")

    model_config = {"frozen": True}


class AuditEntry(BaseModel):
    """One append-only audit record."""

    id: str = Field(..., description="Entry ID")
    account_id: Optional[str] = Field(None, description="Account involved, if known")
    action: AuditAction = Field(..., description="What happened")
    ip_address: Optional[str] = Field(None, description="Client IP address")
    user_agent: Optional[str] = Field(None, description="Client User-Agent")
    success: bool = Field(..., description="Whether the action succeeded")
    error_message: Optional[str] = Field(None, description="Internal failure reason")
    created_at: datetime = Field(..., description="When it happened")

    model_config = {"frozen": True}
