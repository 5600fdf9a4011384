"""Application services: scope resolution, permission gate, filters, validation, audit."""

from app.application.services.audit_recorder import (
    AuditFailure,
    AuditRecorder,
    AuditTrail,
)
from app.application.services.permission_gate import PermissionGate, is_allowed
from app.application.services.permission_service import PermissionService
from app.application.services.role_service import RoleService
from app.application.services.scope_filter_compiler import ScopeFields, compile_scope_filter
from app.application.services.scope_resolver import ScopeResolver
from app.application.services.scope_validator import CrossEntityScopeValidator
from app.application.services.user_service import UserService

__all__ = [
    "AuditFailure",
    "AuditRecorder",
    "AuditTrail",
    "CrossEntityScopeValidator",
    "PermissionGate",
    "PermissionService",
    "RoleService",
    "ScopeFields",
    "ScopeResolver",
    "UserService",
    "compile_scope_filter",
    "is_allowed",
]
