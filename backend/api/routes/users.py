"""
User-related endpoints.

Endpoints for the signed-in account.
"""

from fastapi import APIRouter, Depends

from modules.audit.models import ClientContext
from modules.auth.models import ChangePasswordRequest
from modules.auth.service import AuthCoordinator
from shared.models import AuthenticatedUser, MessageResponse

from ..dependencies import get_auth_coordinator, get_client_context
from ..middleware.auth import get_current_user

router = APIRouter()


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    client: ClientContext = Depends(get_client_context),
    coordinator: AuthCoordinator = Depends(get_auth_coordinator),
) -> MessageResponse:
    """
    Change the current account's password.

    Requires authentication. A wrong current password is a 400
    INVALID_PASSWORD.
    """
    await coordinator.change_password(user.id, request, client)
    return MessageResponse(message="Password changed successfully")
