"""
Authentication API endpoints.

Registration, login, token refresh, logout, token introspection and
password reset. Login is the only path behind the throttle.
"""

from fastapi import APIRouter, Depends

from api.dependencies import (
    get_auth_coordinator,
    get_client_context,
    get_login_throttle,
    get_password_reset_service,
    get_session_coordinator,
)
from api.middleware.auth import get_bearer_token, get_current_user
from modules.audit.models import ClientContext
from modules.throttle.service import LoginThrottle
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser, MessageResponse

from .models import (
    AuthResponse,
    LoginRequest,
    PasswordResetConfirmRequest,
    PasswordResetRequest,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
    TokenVerifyResponse,
)
from .reset import PasswordResetService
from .service import AuthCoordinator
from .session import SessionCoordinator

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    client: ClientContext = Depends(get_client_context),
    coordinator: AuthCoordinator = Depends(get_auth_coordinator),
) -> AuthResponse:
    """
    Create an account and return its first token pair.

    Returns 409 EMAIL_EXISTS when the email is already registered.
    """
    return await coordinator.register(request, client)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    client: ClientContext = Depends(get_client_context),
    throttle: LoginThrottle = Depends(get_login_throttle),
    coordinator: AuthCoordinator = Depends(get_auth_coordinator),
) -> AuthResponse:
    """
    Exchange email and password for a token pair.

    A locked-out client gets 429 before its credentials are looked at.
    """
    key = LoginThrottle.key_for(client.ip_address)
    await throttle.check(key)

    try:
        response = await coordinator.login(request.email, request.password, client)
    except AuthenticationError:
        await throttle.record_failure(key)
        raise

    await throttle.record_success(key)
    return response


@router.post("/refresh", response_model=TokenPair)
async def refresh(
    request: RefreshRequest,
    client: ClientContext = Depends(get_client_context),
    sessions: SessionCoordinator = Depends(get_session_coordinator),
) -> TokenPair:
    """
    Rotate a refresh token.

    The submitted token is revoked; reusing it afterwards fails with 401.
    """
    return await sessions.refresh(request.refresh_token, client)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    user: AuthenticatedUser = Depends(get_current_user),
    client: ClientContext = Depends(get_client_context),
    sessions: SessionCoordinator = Depends(get_session_coordinator),
) -> MessageResponse:
    """Revoke all refresh tokens of the signed-in account."""
    await sessions.logout(user.id, client)
    return MessageResponse(message="Logout successful")


@router.post("/verify", response_model=TokenVerifyResponse)
async def verify(
    user: AuthenticatedUser = Depends(get_current_user),
    token: str = Depends(get_bearer_token),
    sessions: SessionCoordinator = Depends(get_session_coordinator),
) -> TokenVerifyResponse:
    """Report whether the presented access token is valid, with the profile."""
    return await sessions.verify(token, user.id)


@router.post("/password-reset", response_model=MessageResponse)
async def request_password_reset(
    request: PasswordResetRequest,
    client: ClientContext = Depends(get_client_context),
    service: PasswordResetService = Depends(get_password_reset_service),
) -> MessageResponse:
    """
    Start a password reset.

    Always answers 200 with the same message so the response does not
    reveal whether the email is registered.
    """
    await service.request_reset(request.email, client)
    return MessageResponse(message="If the email exists, a password reset link has been sent")


@router.post("/password-reset/{token}", response_model=MessageResponse)
async def confirm_password_reset(
    token: str,
    request: PasswordResetConfirmRequest,
    client: ClientContext = Depends(get_client_context),
    service: PasswordResetService = Depends(get_password_reset_service),
) -> MessageResponse:
    """
    Set a new password with a reset token.

    Returns 400 INVALID_TOKEN for an unknown, used or expired token.
    """
    await service.confirm_reset(token, request.new_password, client)
    return MessageResponse(message="Password reset successful")
