"""Pydantic request/response schemas for the API."""

from app.schemas.audit_log import AuditLogEntryResponse, AuditLogListResponse
from app.schemas.auth import MeResponse
from app.schemas.contact import CardResponse, ContactListResponse, ContactResponse
from app.schemas.health import HealthResponse
from app.schemas.organization import DepartmentResponse, HotelResponse
from app.schemas.permission import PermissionResponse
from app.schemas.role import RoleResponse
from app.schemas.user import ScopeBody, UserResponse

__all__ = [
    "AuditLogEntryResponse",
    "AuditLogListResponse",
    "CardResponse",
    "ContactListResponse",
    "ContactResponse",
    "DepartmentResponse",
    "HealthResponse",
    "HotelResponse",
    "MeResponse",
    "PermissionResponse",
    "RoleResponse",
    "ScopeBody",
    "UserResponse",
]
