"""
Login throttling module.

Counts failed logins per client key in a fixed window and locks the key
out once the threshold is reached.

Public API:
- IThrottleStore: Atomic counter store interface
- InMemoryThrottleStore: Process-local implementation
- LoginThrottle: Gate used by the login endpoint
- LoginThrottledError: Raised while a key is locked out
"""

from .interfaces import IThrottleStore
from .models import ThrottleEntry
from .exceptions import LoginThrottledError
from .service import LoginThrottle
from .store import InMemoryThrottleStore

__all__ = [
    "IThrottleStore",
    "InMemoryThrottleStore",
    "LoginThrottle",
    "ThrottleEntry",
    "LoginThrottledError",
]
