"""Application DTOs (no ORM dependency)."""

from app.application.dtos.audit_log import (
    AuditLogEntryCreate,
    AuditLogPage,
    AuditLogResult,
    RequestOrigin,
)
from app.application.dtos.permission import PermissionResult
from app.application.dtos.principal import Principal
from app.application.dtos.role import RoleResult
from app.application.dtos.user import UserResult

__all__ = [
    "AuditLogEntryCreate",
    "AuditLogPage",
    "AuditLogResult",
    "PermissionResult",
    "Principal",
    "RequestOrigin",
    "RoleResult",
    "UserResult",
]
