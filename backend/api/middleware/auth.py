"""
Bearer token authentication dependencies.

Validates access tokens issued by this service and extracts the caller.
Every validation failure produces the same 401; the reason is logged at
DEBUG by the token issuer and goes no further.
"""

from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from modules.auth.exceptions import (
    InsufficientPermissionsError,
    InvalidTokenError,
    MissingTokenError,
)
from modules.tokens.interfaces import ITokenIssuer
from shared.models import AuthenticatedUser

from ..dependencies import get_token_issuer

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Raw access token from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise MissingTokenError("Missing authorization header")
    return credentials.credentials


async def get_current_user(
    token: str = Depends(get_bearer_token),
    issuer: ITokenIssuer = Depends(get_token_issuer),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a signed-in account.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    result = issuer.validate(token)
    if not result.valid:
        raise InvalidTokenError()

    claims = result.claims
    return AuthenticatedUser(
        id=claims.sub,
        email=claims.email,
        roles=tuple(claims.roles),
        token_id=claims.jti,
    )


def require_roles(*roles: str) -> Callable:
    """
    Build a dependency that admits callers holding any of `roles`.

    Roles come from the access token, so a newly assigned role takes
    effect after the caller's next refresh.

    Usage:
        @router.get("/admin-only")
        async def admin_route(user: AuthenticatedUser = Depends(require_roles("Admin"))):
            ...
    """

    async def dependency(
        user: AuthenticatedUser = Depends(get_current_user),
    ) -> AuthenticatedUser:
        if not user.has_any_role(*roles):
            raise InsufficientPermissionsError(list(roles))
        return user

    return dependency
