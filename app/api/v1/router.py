"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    audit_log,
    auth,
    cards,
    contacts,
    departments,
    health,
    hotels,
    permissions,
    roles,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(hotels.router, prefix="/hotels", tags=["hotels"])
api_router.include_router(departments.router, prefix="/departments", tags=["departments"])
api_router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])
api_router.include_router(cards.router, prefix="/cards", tags=["cards"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(audit_log.router, prefix="/audit-logs", tags=["audit-logs"])
