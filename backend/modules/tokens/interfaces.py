"""
Access token module interface.
"""

from typing import Iterable, Protocol, runtime_checkable

from .models import TokenValidation


@runtime_checkable
class ITokenIssuer(Protocol):
    """Interface for access token issuance and validation."""

    @property
    def expires_in(self) -> int:
        """Access token lifetime in seconds."""
        ...

    def issue_access_token(
        self,
        account_id: str,
        email: str,
        roles: Iterable[str],
    ) -> str:
        """
        Create a signed access token.

        Args:
            account_id: Account ID, stored as the ``sub`` claim
            email: Account email
            roles: Role names carried in the ``roles`` claim

        Returns:
            Compact JWT string
        """
        ...

    def validate(self, token: str) -> TokenValidation:
        """
        Validate signature, issuer, audience and expiry.

        Never raises for a bad token; returns InvalidToken instead.
        """
        ...
