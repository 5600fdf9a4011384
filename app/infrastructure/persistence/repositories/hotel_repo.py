"""Hotel and hotel-department link repositories."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.value_objects.predicate import Predicate
from app.infrastructure.persistence.models.organization import (
    Department,
    Hotel,
    HotelDepartment,
)
from app.infrastructure.persistence.repositories.base import SoftDeleteRepository
from app.infrastructure.persistence.scope_filter import to_sqlalchemy


class HotelRepository(SoftDeleteRepository[Hotel]):
    """Hotels. Scoped reads take a predicate compiled for HOTEL_FIELDS."""

    resource_name = "hotel"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Hotel)

    async def list_scoped(self, predicate: Predicate) -> list[Hotel]:
        """Live hotels (active and inactive) visible under predicate, ordered by name."""
        result = await self.db.execute(
            self._live().where(to_sqlalchemy(predicate, Hotel)).order_by(Hotel.name)
        )
        return list(result.scalars().all())

    async def get_scoped(self, hotel_id: int, predicate: Predicate) -> Hotel | None:
        result = await self.db.execute(
            self._live().where(Hotel.id == hotel_id, to_sqlalchemy(predicate, Hotel))
        )
        return result.scalar_one_or_none()

    async def create_hotel(self, name: str, location: str | None = None) -> Hotel:
        """Create an active hotel; caller checks (name, location) uniqueness first."""
        return await self.create(Hotel(name=name, location=location))

    async def find_duplicate(
        self, name: str, location: str | None, *, exclude_id: int | None = None
    ) -> Hotel | None:
        """Live hotel with the same (name, location), case-insensitive."""
        q = self._live().where(func.lower(Hotel.name) == name.strip().lower())
        if location is None:
            q = q.where(Hotel.location.is_(None))
        else:
            q = q.where(func.lower(Hotel.location) == location.strip().lower())
        if exclude_id is not None:
            q = q.where(Hotel.id != exclude_id)
        result = await self.db.execute(q)
        return result.scalars().first()

    async def live_ids(self, hotel_ids: Iterable[int]) -> set[int]:
        """Subset of hotel_ids that exist and are not deleted."""
        ids = set(hotel_ids)
        if not ids:
            return set()
        result = await self.db.execute(
            select(Hotel.id).where(Hotel.id.in_(ids), Hotel.deleted_at.is_(None))
        )
        return set(result.scalars().all())


class HotelDepartmentRepository:
    """Which departments exist in which hotel. Independent of user scope."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_departments_for_hotel(self, hotel_id: int) -> list[Department]:
        result = await self.db.execute(
            select(Department)
            .join(HotelDepartment, HotelDepartment.department_id == Department.id)
            .where(
                HotelDepartment.hotel_id == hotel_id,
                Department.deleted_at.is_(None),
            )
            .order_by(Department.name)
        )
        return list(result.scalars().all())

    async def list_links(self, predicate: Predicate) -> list[tuple[int, int]]:
        """(hotel_id, department_id) links between live units, filtered by predicate."""
        result = await self.db.execute(
            select(HotelDepartment.hotel_id, HotelDepartment.department_id)
            .join(Hotel, Hotel.id == HotelDepartment.hotel_id)
            .join(Department, Department.id == HotelDepartment.department_id)
            .where(
                Hotel.deleted_at.is_(None),
                Department.deleted_at.is_(None),
                to_sqlalchemy(predicate, HotelDepartment),
            )
            .order_by(HotelDepartment.hotel_id, HotelDepartment.department_id)
        )
        return [(h, d) for h, d in result.all()]

    async def sync(self, hotel_id: int, department_ids: set[int]) -> None:
        """Replace the hotel's department links (caller's transaction)."""
        await self.db.execute(
            delete(HotelDepartment).where(HotelDepartment.hotel_id == hotel_id)
        )
        self.db.add_all(
            HotelDepartment(hotel_id=hotel_id, department_id=d)
            for d in sorted(department_ids)
        )
        await self.db.flush()

    async def unlink(self, hotel_id: int, department_id: int) -> bool:
        result = await self.db.execute(
            delete(HotelDepartment).where(
                HotelDepartment.hotel_id == hotel_id,
                HotelDepartment.department_id == department_id,
            )
        )
        await self.db.flush()
        return (result.rowcount or 0) > 0
