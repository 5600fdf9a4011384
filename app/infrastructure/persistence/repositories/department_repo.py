"""Department repository."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.value_objects.predicate import Predicate
from app.infrastructure.persistence.models.organization import Department
from app.infrastructure.persistence.repositories.base import SoftDeleteRepository
from app.infrastructure.persistence.scope_filter import to_sqlalchemy


class DepartmentRepository(SoftDeleteRepository[Department]):
    """Departments. Scoped reads take a predicate compiled for DEPARTMENT_FIELDS."""

    resource_name = "department"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Department)

    async def list_scoped(self, predicate: Predicate) -> list[Department]:
        result = await self.db.execute(
            self._live()
            .where(to_sqlalchemy(predicate, Department))
            .order_by(Department.name)
        )
        return list(result.scalars().all())

    async def get_scoped(self, department_id: int, predicate: Predicate) -> Department | None:
        result = await self.db.execute(
            self._live().where(
                Department.id == department_id, to_sqlalchemy(predicate, Department)
            )
        )
        return result.scalar_one_or_none()

    async def create_department(
        self, name: str, description: str | None = None
    ) -> Department:
        """Create an active department; caller checks name uniqueness first."""
        return await self.create(Department(name=name, description=description))

    async def get_by_name(
        self, name: str, *, exclude_id: int | None = None
    ) -> Department | None:
        """Live department with this name, case-insensitive."""
        q = self._live().where(func.lower(Department.name) == name.strip().lower())
        if exclude_id is not None:
            q = q.where(Department.id != exclude_id)
        result = await self.db.execute(q)
        return result.scalars().first()

    async def live_ids(self, department_ids: Iterable[int]) -> set[int]:
        """Subset of department_ids that exist and are not deleted."""
        ids = set(department_ids)
        if not ids:
            return set()
        result = await self.db.execute(
            select(Department.id).where(
                Department.id.in_(ids), Department.deleted_at.is_(None)
            )
        )
        return set(result.scalars().all())
