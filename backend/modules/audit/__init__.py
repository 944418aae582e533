"""
Audit module.

Appends immutable records of security-relevant actions. Writing is
best-effort: a failed write is logged and never reaches the operation
that triggered it.

Public API:
- IAuditStore: Persistence interface
- AuditRecorder: Fire-and-forget recorder used by the coordinators
- AuditEntry, AuditAction, ClientContext: Data models
"""

from .interfaces import IAuditStore
from .models import AuditAction, AuditEntry, ClientContext
from .service import AuditRecorder
from .store import InMemoryAuditStore

__all__ = [
    "IAuditStore",
    "InMemoryAuditStore",
    "AuditRecorder",
    "AuditAction",
    "AuditEntry",
    "ClientContext",
]
