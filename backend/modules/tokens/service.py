"""
Access token service implementation.

Tokens are HS256 JWTs signed with the configured secret. Expiry is
checked against the injected clock with zero leeway, so PyJWT's own
wall-clock checks (exp, iat) are switched off and done here instead.
"""

import logging
import uuid
from datetime import timedelta
from typing import Iterable, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.clock import Clock, SystemClock
from shared.config import Settings
from shared.exceptions import ConfigurationError

from .interfaces import ITokenIssuer
from .models import AccessTokenClaims, InvalidToken, TokenValidation, ValidToken

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "email", "jti", "iss", "aud", "iat", "exp"]


class TokenIssuer(ITokenIssuer):
    """
    Issues and validates access tokens.

    Construction fails with ConfigurationError when no secret is
    configured; the app builds the issuer during startup so a missing
    secret aborts the process instead of degrading at request time.
    """

    ALGORITHM = "HS256"

    def __init__(
        self,
        secret: str,
        issuer: str,
        audience: str,
        ttl: timedelta = timedelta(minutes=15),
        clock: Optional[Clock] = None,
    ):
        if not secret:
            raise ConfigurationError(
                "JWT secret is not configured. Set the JWT_SECRET environment variable.",
                code="JWT_SECRET_MISSING",
            )
        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._ttl = ttl
        self._clock = clock or SystemClock()

    @classmethod
    def from_settings(cls, settings: Settings, clock: Optional[Clock] = None) -> "TokenIssuer":
        """Build an issuer from application settings."""
        return cls(
            secret=settings.jwt_secret,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            ttl=timedelta(minutes=settings.access_token_ttl_minutes),
            clock=clock,
        )

    @property
    def expires_in(self) -> int:
        return int(self._ttl.total_seconds())

    def issue_access_token(
        self,
        account_id: str,
        email: str,
        roles: Iterable[str],
    ) -> str:
        now = self._clock.now()
        payload = {
            "sub": str(account_id),
            "email": email,
            "jti": str(uuid.uuid4()),
            "roles": sorted(set(roles)),
            "iss": self._issuer,
            "aud": self._audience,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.ALGORITHM)

    def validate(self, token: str) -> TokenValidation:
        if not token:
            return InvalidToken("missing token")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": REQUIRED_CLAIMS,
                },
            )
            claims = AccessTokenClaims(**payload)
        except jwt.InvalidTokenError as e:
            logger.debug("Access token rejected: %s", type(e).__name__)
            return InvalidToken(type(e).__name__)
        except PydanticValidationError:
            logger.debug("Access token rejected: malformed claims")
            return InvalidToken("malformed claims")

        if claims.exp <= self._clock.now().timestamp():
            logger.debug("Access token rejected: expired")
            return InvalidToken("expired")

        return ValidToken(claims)
