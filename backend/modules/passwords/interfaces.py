"""
Password hashing interface.

Coordinators depend on IPasswordHasher so tests can swap in a cheaper
implementation without patching.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IPasswordHasher(Protocol):
    """Interface for one-way salted password hashing."""

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password.

        The result is self-describing (algorithm, cost and salt are
        embedded), and the salt is random per call, so hashing the same
        password twice yields two different strings.
        """
        ...

    def verify(self, password: str, hashed: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        Returns False for a mismatch and for a malformed hash; never raises.
        """
        ...

    def needs_rehash(self, hashed: str) -> bool:
        """Whether the hash was produced with different cost parameters."""
        ...
