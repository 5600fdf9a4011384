"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions. Infrastructure implements
the interfaces (scope directory, contact lookup, audit sink, identity).
"""

from app.application.services import (
    AuditRecorder,
    CrossEntityScopeValidator,
    PermissionGate,
    ScopeResolver,
    compile_scope_filter,
)
from app.application.use_cases import (
    CardService,
    ContactService,
    DepartmentService,
    HotelService,
)

__all__ = [
    "AuditRecorder",
    "CardService",
    "ContactService",
    "CrossEntityScopeValidator",
    "DepartmentService",
    "HotelService",
    "PermissionGate",
    "ScopeResolver",
    "compile_scope_filter",
]
