"""Shared utilities: audit enums, request origin helpers, logging and time.

Used by application and infrastructure. No business logic.
"""

from app.shared.enums import AuditAction, AuditEntityType
from app.shared.utils import ensure_utc, utc_now

__all__ = [
    "AuditAction",
    "AuditEntityType",
    "ensure_utc",
    "utc_now",
]
