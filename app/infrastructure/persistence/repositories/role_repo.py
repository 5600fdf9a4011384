"""Role repository. Names are unique (case-insensitive) among non-deleted roles."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.role import RoleResult
from app.infrastructure.persistence.models.permission import UserRole
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import SoftDeleteRepository


def _role_to_result(r: Role, users_count: int = 0) -> RoleResult:
    """Map ORM Role to application RoleResult."""
    return RoleResult(
        id=r.id,
        name=r.name,
        description=r.description,
        users_count=users_count,
    )


class RoleRepository(SoftDeleteRepository[Role]):
    """Role repository. Read methods return RoleResult; get_live returns ORM for writes."""

    resource_name = "role"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    def audit_values(self, obj: Role) -> dict[str, Any]:
        return {"id": obj.id, "name": obj.name, "description": obj.description}

    async def get_by_name(self, name: str, *, exclude_id: int | None = None) -> Role | None:
        """Return the live role with this name (case-insensitive)."""
        q = self._live().where(func.lower(Role.name) == name.strip().lower())
        if exclude_id is not None:
            q = q.where(Role.id != exclude_id)
        result = await self.db.execute(q)
        return result.scalars().first()

    async def list_with_user_counts(self) -> list[RoleResult]:
        """Return live roles ordered by name with the number of live users holding each."""
        users_count = (
            select(func.count(UserRole.id))
            .join(User, User.id == UserRole.user_id)
            .where(UserRole.role_id == Role.id, User.deleted_at.is_(None))
            .correlate(Role)
            .scalar_subquery()
        )
        result = await self.db.execute(
            select(Role, users_count)
            .where(Role.deleted_at.is_(None))
            .order_by(Role.name)
        )
        return [_role_to_result(role, count or 0) for role, count in result.all()]

    async def create_role(self, name: str, description: str | None = None) -> Role:
        """Create a role; caller checks name uniqueness first."""
        return await self.create(Role(name=name.strip(), description=description))
