"""Scope directory repository: per-user hotel, department and pair assignments.

Implements IScopeDirectory. Reads exclude deleted hotels/departments so a
deleted unit silently drops out of every scope. Storage errors surface as
InfrastructureException; callers never see a partial scope.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import InfrastructureException
from app.domain.value_objects.scope import HotelDepartmentPair, Restricted
from app.infrastructure.persistence.models.organization import Department, Hotel
from app.infrastructure.persistence.models.scope_assignment import (
    UserDepartment,
    UserHotel,
    UserHotelDepartment,
)


class ScopeRepository:
    """Assignment tables only. Bulk replace runs in the caller's transaction."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_hotel_ids(self, user_id: int) -> set[int]:
        try:
            result = await self.db.execute(
                select(UserHotel.hotel_id)
                .join(Hotel, Hotel.id == UserHotel.hotel_id)
                .where(UserHotel.user_id == user_id, Hotel.deleted_at.is_(None))
            )
        except SQLAlchemyError as e:
            raise InfrastructureException(operation="read user hotels") from e
        return set(result.scalars().all())

    async def get_department_ids(self, user_id: int) -> set[int]:
        try:
            result = await self.db.execute(
                select(UserDepartment.department_id)
                .join(Department, Department.id == UserDepartment.department_id)
                .where(
                    UserDepartment.user_id == user_id,
                    Department.deleted_at.is_(None),
                )
            )
        except SQLAlchemyError as e:
            raise InfrastructureException(operation="read user departments") from e
        return set(result.scalars().all())

    async def get_hotel_department_pairs(self, user_id: int) -> set[HotelDepartmentPair]:
        try:
            result = await self.db.execute(
                select(UserHotelDepartment.hotel_id, UserHotelDepartment.department_id)
                .join(Hotel, Hotel.id == UserHotelDepartment.hotel_id)
                .join(Department, Department.id == UserHotelDepartment.department_id)
                .where(
                    UserHotelDepartment.user_id == user_id,
                    Hotel.deleted_at.is_(None),
                    Department.deleted_at.is_(None),
                )
            )
        except SQLAlchemyError as e:
            raise InfrastructureException(operation="read user hotel departments") from e
        return {HotelDepartmentPair(h, d) for h, d in result.all()}

    async def replace_scope(
        self,
        user_id: int,
        hotel_ids: set[int],
        department_ids: set[int],
        pairs: set[HotelDepartmentPair],
    ) -> None:
        """Delete the user's three assignment sets and insert the new ones.

        Must run inside one transaction (get_db_transactional) so readers see
        either the old or the new scope, never an empty or mixed one.
        """
        await self.db.execute(delete(UserHotel).where(UserHotel.user_id == user_id))
        await self.db.execute(
            delete(UserDepartment).where(UserDepartment.user_id == user_id)
        )
        await self.db.execute(
            delete(UserHotelDepartment).where(UserHotelDepartment.user_id == user_id)
        )
        self.db.add_all(UserHotel(user_id=user_id, hotel_id=h) for h in sorted(hotel_ids))
        self.db.add_all(
            UserDepartment(user_id=user_id, department_id=d) for d in sorted(department_ids)
        )
        self.db.add_all(
            UserHotelDepartment(
                user_id=user_id, hotel_id=p.hotel_id, department_id=p.department_id
            )
            for p in sorted(pairs)
        )
        await self.db.flush()

    async def snapshot(self, user_id: int) -> dict[str, Any]:
        """Stored assignments of a user in the scope exchange shape (audit pre-state)."""
        return Restricted(
            hotel_ids=await self.get_hotel_ids(user_id),
            department_ids=await self.get_department_ids(user_id),
            hotel_dept_pairs=await self.get_hotel_department_pairs(user_id),
        ).to_dict()
