"""Resolves the request principal from the DB (implements IPrincipalResolver)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.principal import Principal
from app.domain.enums import normalize_permission_key
from app.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.user import User


class PrincipalResolver:
    """Loads an active user's role names and the union of their permission keys.

    Only active, non-deleted users resolve; deleted roles contribute nothing.
    Queried on every request, never cached.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def resolve(self, user_id: int) -> Principal | None:
        user_result = await self.db.execute(
            select(User.id, User.username).where(
                User.id == user_id,
                User.deleted_at.is_(None),
                User.is_active.is_(True),
            )
        )
        user = user_result.one_or_none()
        if user is None:
            return None

        roles_result = await self.db.execute(
            select(Role.name)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id, Role.deleted_at.is_(None))
        )
        roles = frozenset(roles_result.scalars().all())

        permissions_result = await self.db.execute(
            select(Permission.perm_key)
            .select_from(UserRole)
            .join(Role, Role.id == UserRole.role_id)
            .join(RolePermission, RolePermission.role_id == UserRole.role_id)
            .join(Permission, Permission.id == RolePermission.permission_id)
            .where(UserRole.user_id == user_id, Role.deleted_at.is_(None))
        )
        permissions = frozenset(
            normalize_permission_key(k) for k in permissions_result.scalars().all()
        )
        return Principal(
            user_id=user.id,
            username=user.username,
            roles=roles,
            permissions=permissions,
        )
