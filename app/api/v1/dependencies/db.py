"""Repository dependencies (composition root).

Read repositories share the request's read session (get_db); write
repositories share its single transactional session (get_db_transactional),
so every write of one request commits or rolls back as one unit.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    AuditLogRepository,
    CardRepository,
    ContactRepository,
    DepartmentRepository,
    HotelDepartmentRepository,
    HotelRepository,
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    ScopeRepository,
    UserRepository,
    UserRoleRepository,
)

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]


async def get_audit_log_repo(db: ReadSession) -> AuditLogRepository:
    """Audit log repository for read (list). Writes go through the audit dispatcher."""
    return AuditLogRepository(db)


async def get_scope_repo(db: ReadSession) -> ScopeRepository:
    """Scope directory for resolving the current actor's scope."""
    return ScopeRepository(db)


async def get_hotel_repo(db: ReadSession) -> HotelRepository:
    return HotelRepository(db)


async def get_hotel_repo_for_write(db: WriteSession) -> HotelRepository:
    return HotelRepository(db)


async def get_hotel_department_repo(db: ReadSession) -> HotelDepartmentRepository:
    return HotelDepartmentRepository(db)


async def get_hotel_department_repo_for_write(
    db: WriteSession,
) -> HotelDepartmentRepository:
    return HotelDepartmentRepository(db)


async def get_department_repo(db: ReadSession) -> DepartmentRepository:
    return DepartmentRepository(db)


async def get_department_repo_for_write(db: WriteSession) -> DepartmentRepository:
    return DepartmentRepository(db)


async def get_contact_repo(db: ReadSession) -> ContactRepository:
    return ContactRepository(db)


async def get_contact_repo_for_write(db: WriteSession) -> ContactRepository:
    return ContactRepository(db)


async def get_card_repo(db: ReadSession) -> CardRepository:
    return CardRepository(db)


async def get_card_repo_for_write(db: WriteSession) -> CardRepository:
    return CardRepository(db)


async def get_role_repo(db: ReadSession) -> RoleRepository:
    """Role repository for read operations (list, get by id)."""
    return RoleRepository(db)


async def get_role_repo_for_write(db: WriteSession) -> RoleRepository:
    """Role repository for create/update/delete."""
    return RoleRepository(db)


async def get_permission_repo(db: ReadSession) -> PermissionRepository:
    """Permission repository for read operations."""
    return PermissionRepository(db)


async def get_permission_repo_for_write(db: WriteSession) -> PermissionRepository:
    """Permission repository for create/delete and role assignment checks (transactional)."""
    return PermissionRepository(db)


async def get_role_permission_repo(db: ReadSession) -> RolePermissionRepository:
    return RolePermissionRepository(db)


async def get_role_permission_repo_for_write(db: WriteSession) -> RolePermissionRepository:
    """Role-permission repository for assign/remove/replace (transactional)."""
    return RolePermissionRepository(db)


async def get_user_repo(db: ReadSession) -> UserRepository:
    """User repository for read operations."""
    return UserRepository(db)


async def get_user_repo_for_write(db: WriteSession) -> UserRepository:
    """User repository for toggle/delete (transactional)."""
    return UserRepository(db)


async def get_user_role_repo(db: ReadSession) -> UserRoleRepository:
    return UserRoleRepository(db)


async def get_user_role_repo_for_write(db: WriteSession) -> UserRoleRepository:
    """User-role repository for assign/remove (transactional)."""
    return UserRoleRepository(db)


async def get_scope_repo_for_write(db: WriteSession) -> ScopeRepository:
    """Scope directory for bulk scope replacement (transactional)."""
    return ScopeRepository(db)
