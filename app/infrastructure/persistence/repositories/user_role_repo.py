"""UserRole repository: user–role assignments (single entity responsibility)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import DuplicateAssignmentException
from app.infrastructure.persistence.models.permission import UserRole
from app.infrastructure.persistence.models.role import Role


class UserRoleRepository:
    """User–role link table only. Assign/remove and list roles for a user."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_user_roles(self, user_id: int) -> list[Role]:
        """Live roles held by the user, ordered by name."""
        result = await self.db.execute(
            select(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id, Role.deleted_at.is_(None))
            .order_by(Role.name)
        )
        return list(result.scalars().all())

    async def assign_role_to_user(
        self,
        user_id: int,
        role_id: int,
        assigned_by: int | None = None,
    ) -> UserRole:
        existing = await self.db.execute(
            select(UserRole.id).where(
                UserRole.user_id == user_id, UserRole.role_id == role_id
            )
        )
        if existing.scalar_one_or_none() is not None:
            raise DuplicateAssignmentException(
                "Role already assigned to user",
                assignment_type="user_role",
                details_extra={"user_id": user_id, "role_id": role_id},
            )
        ur = UserRole(user_id=user_id, role_id=role_id, assigned_by=assigned_by)
        try:
            self.db.add(ur)
            await self.db.flush()
            await self.db.refresh(ur)
        except IntegrityError:
            raise DuplicateAssignmentException(
                "Role already assigned to user",
                assignment_type="user_role",
                details_extra={"user_id": user_id, "role_id": role_id},
            ) from None
        return ur

    async def remove_role_from_user(self, user_id: int, role_id: int) -> bool:
        result = await self.db.execute(
            select(UserRole).where(
                UserRole.user_id == user_id,
                UserRole.role_id == role_id,
            )
        )
        ur = result.scalar_one_or_none()
        if not ur:
            return False
        await self.db.delete(ur)
        await self.db.flush()
        return True
