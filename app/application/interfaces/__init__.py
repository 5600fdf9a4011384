"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IAuditLogRepository,
    IContactScopeLookup,
    IRolePermissionDirectory,
    IScopeDirectory,
)
from app.application.interfaces.services import (
    IAuditSink,
    IIdentityProvider,
    IPrincipalResolver,
)

__all__ = [
    "IAuditLogRepository",
    "IAuditSink",
    "IContactScopeLookup",
    "IIdentityProvider",
    "IPrincipalResolver",
    "IRolePermissionDirectory",
    "IScopeDirectory",
]
