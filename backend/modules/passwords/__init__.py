"""
Password hashing module.

Public API:
- IPasswordHasher: Interface for hashing and verification
- PasswordHasher: argon2id implementation
"""

from .interfaces import IPasswordHasher
from .hasher import PasswordHasher

__all__ = [
    "IPasswordHasher",
    "PasswordHasher",
]
