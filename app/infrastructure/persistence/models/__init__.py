"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.audit_log import AuditLog
from app.infrastructure.persistence.models.contact import Card, Contact
from app.infrastructure.persistence.models.mixins import (
    ActiveFlagMixin,
    IntIdMixin,
    SoftDeleteMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.organization import (
    Department,
    Hotel,
    HotelDepartment,
)
from app.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.scope_assignment import (
    UserDepartment,
    UserHotel,
    UserHotelDepartment,
)
from app.infrastructure.persistence.models.user import User

__all__ = [
    "ActiveFlagMixin",
    "AuditLog",
    "Card",
    "Contact",
    "Department",
    "Hotel",
    "HotelDepartment",
    "IntIdMixin",
    "Permission",
    "Role",
    "RolePermission",
    "SoftDeleteMixin",
    "TimestampMixin",
    "User",
    "UserDepartment",
    "UserHotel",
    "UserHotelDepartment",
    "UserRole",
]
