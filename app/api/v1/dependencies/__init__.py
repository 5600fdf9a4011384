"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the current principal and scope,
permission checks, audit recording and application services. Routes depend
only on these dependencies, not on infrastructure directly.
"""

from app.api.v1.dependencies.audit import (
    audited,
    get_audit_recorder,
    get_audit_sink,
    scoped_snapshot_with,
    snapshot_with,
)
from app.api.v1.dependencies.auth import (
    CurrentPrincipal,
    CurrentScope,
    get_current_principal,
    get_identity_provider,
    get_scope,
    require_permission,
)
from app.api.v1.dependencies.db import get_audit_log_repo
from app.api.v1.dependencies.services import (
    get_card_service,
    get_card_service_for_write,
    get_contact_service,
    get_contact_service_for_write,
    get_department_service,
    get_department_service_for_write,
    get_hotel_service,
    get_hotel_service_for_write,
    get_permission_service,
    get_permission_service_for_write,
    get_role_service,
    get_role_service_for_write,
    get_user_service,
    get_user_service_for_write,
)

__all__ = [
    "CurrentPrincipal",
    "CurrentScope",
    "audited",
    "get_audit_log_repo",
    "get_audit_recorder",
    "get_audit_sink",
    "get_card_service",
    "get_card_service_for_write",
    "get_contact_service",
    "get_contact_service_for_write",
    "get_current_principal",
    "get_department_service",
    "get_department_service_for_write",
    "get_hotel_service",
    "get_hotel_service_for_write",
    "get_identity_provider",
    "get_permission_service",
    "get_permission_service_for_write",
    "get_role_service",
    "get_role_service_for_write",
    "get_scope",
    "get_user_service",
    "get_user_service_for_write",
    "require_permission",
    "scoped_snapshot_with",
    "snapshot_with",
]
