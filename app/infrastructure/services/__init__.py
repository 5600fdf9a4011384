"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.audit_dispatcher import AuditDispatcher
from app.infrastructure.services.principal_resolver import PrincipalResolver

__all__ = [
    "AuditDispatcher",
    "PrincipalResolver",
]
