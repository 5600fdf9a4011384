"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.audit_log_repo import AuditLogRepository
from app.infrastructure.persistence.repositories.base import (
    BaseRepository,
    SoftDeleteRepository,
)
from app.infrastructure.persistence.repositories.card_repo import CardRepository
from app.infrastructure.persistence.repositories.contact_repo import ContactRepository
from app.infrastructure.persistence.repositories.department_repo import (
    DepartmentRepository,
)
from app.infrastructure.persistence.repositories.hotel_repo import (
    HotelDepartmentRepository,
    HotelRepository,
)
from app.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from app.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionRepository,
)
from app.infrastructure.persistence.repositories.role_repo import RoleRepository
from app.infrastructure.persistence.repositories.scope_repo import ScopeRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository
from app.infrastructure.persistence.repositories.user_role_repo import (
    UserRoleRepository,
)

__all__ = [
    "AuditLogRepository",
    "BaseRepository",
    "CardRepository",
    "ContactRepository",
    "DepartmentRepository",
    "HotelDepartmentRepository",
    "HotelRepository",
    "PermissionRepository",
    "RolePermissionRepository",
    "RoleRepository",
    "ScopeRepository",
    "SoftDeleteRepository",
    "UserRepository",
    "UserRoleRepository",
]
