"""Permission repository: the catalog of permission keys."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.permission import PermissionResult
from app.infrastructure.persistence.models.permission import Permission, RolePermission
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.repositories.base import BaseRepository


def _permission_to_result(p: Permission) -> PermissionResult:
    return PermissionResult(
        id=p.id,
        perm_key=p.perm_key,
        module_name=p.module_name,
        action_name=p.action_name,
    )


class PermissionRepository(BaseRepository[Permission]):
    """Permission catalog. Keys are stored upper-cased."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission)

    def audit_values(self, obj: Permission) -> dict[str, Any]:
        return {
            "id": obj.id,
            "perm_key": obj.perm_key,
            "module_name": obj.module_name,
            "action_name": obj.action_name,
        }

    async def snapshot(self, entity_id: int) -> dict[str, Any] | None:
        obj = await self.get_by_id(entity_id)
        return self.audit_values(obj) if obj is not None else None

    async def get_by_key(self, perm_key: str) -> Permission | None:
        result = await self.db.execute(
            select(Permission).where(Permission.perm_key == perm_key)
        )
        return result.scalar_one_or_none()

    async def get_by_ids(self, permission_ids: Iterable[int]) -> list[Permission]:
        ids = set(permission_ids)
        if not ids:
            return []
        result = await self.db.execute(select(Permission).where(Permission.id.in_(ids)))
        return list(result.scalars().all())

    async def list_all(self) -> list[PermissionResult]:
        result = await self.db.execute(
            select(Permission).order_by(Permission.module_name, Permission.action_name)
        )
        return [_permission_to_result(p) for p in result.scalars().all()]

    async def get_permissions_for_role(self, role_id: int) -> list[PermissionResult]:
        """Return the role's permissions ordered by key."""
        result = await self.db.execute(
            select(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(RolePermission.role_id == role_id)
            .order_by(Permission.perm_key)
        )
        return [_permission_to_result(p) for p in result.scalars().all()]

    async def count_role_references(self, permission_id: int) -> int:
        """Number of live roles holding this permission."""
        result = await self.db.execute(
            select(func.count(RolePermission.id))
            .join(Role, Role.id == RolePermission.role_id)
            .where(
                RolePermission.permission_id == permission_id,
                Role.deleted_at.is_(None),
            )
        )
        return int(result.scalar_one())

    async def create_permission(
        self, perm_key: str, module_name: str, action_name: str
    ) -> Permission:
        return await self.create(
            Permission(perm_key=perm_key, module_name=module_name, action_name=action_name)
        )
