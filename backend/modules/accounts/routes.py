"""
Admin account endpoints.

Every route requires the Admin role.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_account_service
from api.middleware.auth import require_roles
from shared.exceptions import ValidationError
from shared.models import AuthenticatedUser, MessageResponse

from .models import AccountDetail, AssignRoleRequest
from .service import AccountService

router = APIRouter()

require_admin = require_roles("Admin")


@router.get("/users/{account_id}", response_model=AccountDetail)
async def get_account(
    account_id: str,
    admin: AuthenticatedUser = Depends(require_admin),
    service: AccountService = Depends(get_account_service),
) -> AccountDetail:
    """
    Get an account with roles and login history.

    Returns 404 USER_NOT_FOUND for unknown IDs.
    """
    return await service.get_detail(account_id)


@router.post("/users/{account_id}/roles", response_model=MessageResponse)
async def assign_role(
    account_id: str,
    request: AssignRoleRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """
    Assign a role to an account.

    Fails with 400 ASSIGN_ROLE_FAILED when the account or role is
    unknown or the role is already assigned.
    """
    if not await service.assign_role(account_id, request.role_name):
        raise ValidationError(
            "Failed to assign role. User or role not found, or role already assigned.",
            code="ASSIGN_ROLE_FAILED",
        )
    return MessageResponse(message="Role assigned successfully")
