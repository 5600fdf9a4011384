"""RolePermission repository: role–permission assignments (implements IRolePermissionDirectory)."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import DuplicateAssignmentException
from app.infrastructure.persistence.models.permission import RolePermission


class RolePermissionRepository:
    """Role–permission link table only. Assign/remove, bulk replace, and query ids for a role."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_permission_ids_for_role(self, role_id: int) -> set[int]:
        result = await self.db.execute(
            select(RolePermission.permission_id).where(RolePermission.role_id == role_id)
        )
        return set(result.scalars().all())

    async def set_role_permissions(self, role_id: int, permission_ids: set[int]) -> None:
        """Replace the role's permission set (delete then insert, caller's transaction)."""
        await self.db.execute(delete(RolePermission).where(RolePermission.role_id == role_id))
        self.db.add_all(
            RolePermission(role_id=role_id, permission_id=pid) for pid in sorted(permission_ids)
        )
        await self.db.flush()

    async def assign_permission_to_role(self, role_id: int, permission_id: int) -> None:
        existing = await self.db.execute(
            select(RolePermission.id).where(
                RolePermission.role_id == role_id,
                RolePermission.permission_id == permission_id,
            )
        )
        if existing.scalar_one_or_none() is not None:
            raise DuplicateAssignmentException(
                "Permission already assigned to role",
                assignment_type="role_permission",
                details_extra={"role_id": role_id, "permission_id": permission_id},
            )
        try:
            self.db.add(RolePermission(role_id=role_id, permission_id=permission_id))
            await self.db.flush()
        except IntegrityError:
            raise DuplicateAssignmentException(
                "Permission already assigned to role",
                assignment_type="role_permission",
                details_extra={"role_id": role_id, "permission_id": permission_id},
            ) from None

    async def remove_permission_from_role(self, role_id: int, permission_id: int) -> bool:
        result = await self.db.execute(
            select(RolePermission).where(
                RolePermission.role_id == role_id,
                RolePermission.permission_id == permission_id,
            )
        )
        rp = result.scalar_one_or_none()
        if not rp:
            return False
        await self.db.delete(rp)
        await self.db.flush()
        return True
