"""
argon2id password hashing via argon2-cffi.

Cost parameters are fixed per deployment (see Settings.password_hash_*)
and chosen so one hash takes tens of milliseconds.
"""

import logging

from argon2 import PasswordHasher as _Argon2Hasher, Type
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from .interfaces import IPasswordHasher

logger = logging.getLogger(__name__)


class PasswordHasher(IPasswordHasher):
    """argon2id hasher. Verification uses argon2's constant-time comparison."""

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        self._hasher = _Argon2Hasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return self._hasher.verify(hashed, password)
        except VerifyMismatchError:
            return False
        except (VerificationError, InvalidHashError):
            logger.debug("Stored password hash could not be verified")
            return False

    def needs_rehash(self, hashed: str) -> bool:
        try:
            return self._hasher.check_needs_rehash(hashed)
        except (InvalidHashError, ValueError):
            return False
