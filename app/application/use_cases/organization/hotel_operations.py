"""Hotel operations: scoped reads, lifecycle, and hotel-department links."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from app.application.services.scope_filter_compiler import (
    HOTEL_FIELDS,
    HOTEL_DEPARTMENT_LINK_FIELDS,
    compile_scope_filter,
)
from app.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects.scope import HotelDepartmentPair, Restricted, Scope

_MSG_DUPLICATE_HOTEL = "Hotel with the same name and location already exists"


class HotelService:
    """Hotels visible under the caller's scope. Out-of-scope hotels are reported as not found."""

    def __init__(self, hotel_repo: Any, link_repo: Any, department_repo: Any) -> None:
        self.hotel_repo = hotel_repo
        self.link_repo = link_repo
        self.department_repo = department_repo

    async def list_hotels(self, scope: Scope) -> list[Any]:
        return await self.hotel_repo.list_scoped(compile_scope_filter(scope, HOTEL_FIELDS))

    async def get_hotel(self, scope: Scope, hotel_id: int) -> Any:
        hotel = await self.hotel_repo.get_scoped(
            hotel_id, compile_scope_filter(scope, HOTEL_FIELDS)
        )
        if hotel is None:
            raise ResourceNotFoundException("hotel", hotel_id)
        return hotel

    async def create_hotel(self, name: str, location: str | None = None) -> Any:
        """Create an active hotel; Conflict if a live hotel has the same (name, location)."""
        name = name.strip()
        if not name:
            raise ValidationException("Hotel name is required", field="name")
        if await self.hotel_repo.find_duplicate(name, location):
            raise ConflictException(
                _MSG_DUPLICATE_HOTEL, details={"name": name, "location": location}
            )
        return await self.hotel_repo.create_hotel(name=name, location=location)

    async def update_hotel(
        self,
        scope: Scope,
        hotel_id: int,
        name: str | None = None,
        location: str | None = None,
    ) -> Any:
        hotel = await self.get_hotel(scope, hotel_id)
        new_name = name.strip() if name is not None else hotel.name
        new_location = location if location is not None else hotel.location
        if not new_name:
            raise ValidationException("Hotel name is required", field="name")
        if await self.hotel_repo.find_duplicate(
            new_name, new_location, exclude_id=hotel_id
        ):
            raise ConflictException(
                _MSG_DUPLICATE_HOTEL,
                details={"name": new_name, "location": new_location},
            )
        hotel.name = new_name
        hotel.location = new_location
        return await self.hotel_repo.update(hotel)

    async def toggle_active(self, scope: Scope, hotel_id: int) -> Any:
        hotel = await self.get_hotel(scope, hotel_id)
        return await self.hotel_repo.toggle_active(hotel)

    async def delete_hotel(
        self, scope: Scope, hotel_id: int, deleted_by: int | None = None
    ) -> Any:
        hotel = await self.get_hotel(scope, hotel_id)
        return await self.hotel_repo.soft_delete(hotel, deleted_by=deleted_by)

    async def list_departments(self, scope: Scope, hotel_id: int) -> list[Any]:
        """Departments linked to a visible hotel."""
        await self.get_hotel(scope, hotel_id)
        return await self.link_repo.list_departments_for_hotel(hotel_id)

    async def sync_departments(
        self, scope: Scope, hotel_id: int, department_ids: Iterable[int]
    ) -> list[Any]:
        """Replace the hotel's department links in one transaction."""
        await self.get_hotel(scope, hotel_id)
        wanted = set(department_ids)
        unknown = wanted - await self.department_repo.live_ids(wanted)
        if unknown:
            raise ValidationException(
                f"Unknown department ids: {sorted(unknown)}", field="department_ids"
            )
        await self.link_repo.sync(hotel_id, wanted)
        return await self.link_repo.list_departments_for_hotel(hotel_id)

    async def unlink_department(
        self, scope: Scope, hotel_id: int, department_id: int
    ) -> None:
        await self.get_hotel(scope, hotel_id)
        if not await self.link_repo.unlink(hotel_id, department_id):
            raise ResourceNotFoundException(
                "hotel_department", f"{hotel_id}:{department_id}"
            )

    async def list_links(self, scope: Scope) -> list[HotelDepartmentPair]:
        """Hotel-department links the caller may use.

        Admins see every link between live units. Restricted callers see
        exactly their assigned pairs.
        """
        if isinstance(scope, Restricted):
            return sorted(scope.hotel_dept_pairs)
        rows = await self.link_repo.list_links(
            compile_scope_filter(scope, HOTEL_DEPARTMENT_LINK_FIELDS)
        )
        return [HotelDepartmentPair(h, d) for h, d in rows]
