"""User administration service: lifecycle, role membership and scope assignment."""

from __future__ import annotations

from typing import Any

from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import IScopeDirectory
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.domain.value_objects.scope import HotelDepartmentPair, Restricted


class UserService:
    """Administer existing users. Credentials belong to the identity service."""

    def __init__(
        self,
        user_repo: Any,
        user_role_repo: Any,
        role_repo: Any,
        scope_directory: IScopeDirectory,
        hotel_repo: Any,
        department_repo: Any,
    ) -> None:
        self._user_repo = user_repo
        self._user_role_repo = user_role_repo
        self._role_repo = role_repo
        self._scope_directory = scope_directory
        self._hotel_repo = hotel_repo
        self._department_repo = department_repo

    async def list_users(
        self,
        *,
        is_active: bool | None = None,
        q: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[UserResult]:
        return await self._user_repo.list_users(
            is_active=is_active, q=q, skip=skip, limit=limit
        )

    async def get_user(self, user_id: int) -> UserResult:
        user = await self._user_repo.get_result(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    async def toggle_active(self, user_id: int) -> UserResult:
        """Flip is_active. Inactive users fail authentication until re-activated."""
        user = await self._user_repo.require_live(user_id)
        await self._user_repo.toggle_active(user)
        return await self.get_user(user_id)

    async def delete_user(self, user_id: int, deleted_by: int | None = None) -> Any:
        """Soft-delete a user. A user cannot delete themselves."""
        if deleted_by is not None and user_id == deleted_by:
            raise ValidationException("You cannot delete your own account")
        user = await self._user_repo.require_live(user_id)
        return await self._user_repo.soft_delete(user, deleted_by=deleted_by)

    async def list_user_roles(self, user_id: int) -> list[Any]:
        await self._user_repo.require_live(user_id)
        return await self._user_role_repo.get_user_roles(user_id)

    async def assign_role(
        self, user_id: int, role_id: int, assigned_by: int | None = None
    ) -> Any:
        """Give the user a live role; DuplicateAssignmentException if already held."""
        await self._user_repo.require_live(user_id)
        role = await self._role_repo.require_live(role_id)
        await self._user_role_repo.assign_role_to_user(
            user_id=user_id, role_id=role_id, assigned_by=assigned_by
        )
        return role

    async def remove_role(self, user_id: int, role_id: int) -> None:
        await self._user_repo.require_live(user_id)
        removed = await self._user_role_repo.remove_role_from_user(user_id, role_id)
        if not removed:
            raise ResourceNotFoundException("user_role", f"{user_id}:{role_id}")

    async def get_scope(self, user_id: int) -> Restricted:
        """Stored assignments of a user (admins still have rows, they are just ignored)."""
        await self._user_repo.require_live(user_id)
        return Restricted(
            hotel_ids=frozenset(await self._scope_directory.get_hotel_ids(user_id)),
            department_ids=frozenset(
                await self._scope_directory.get_department_ids(user_id)
            ),
            hotel_dept_pairs=frozenset(
                await self._scope_directory.get_hotel_department_pairs(user_id)
            ),
        )

    async def replace_scope(
        self,
        user_id: int,
        hotel_ids: set[int],
        department_ids: set[int],
        pairs: set[HotelDepartmentPair],
    ) -> Restricted:
        """Replace all three assignment sets atomically (caller's transaction).

        Raises:
            ResourceNotFoundException: Unknown or deleted user.
            ValidationException: A referenced hotel or department is missing or deleted.
        """
        await self._user_repo.require_live(user_id)
        wanted_hotels = set(hotel_ids) | {p.hotel_id for p in pairs}
        wanted_departments = set(department_ids) | {p.department_id for p in pairs}
        unknown_hotels = wanted_hotels - await self._hotel_repo.live_ids(wanted_hotels)
        if unknown_hotels:
            raise ValidationException(
                f"Unknown hotel ids: {sorted(unknown_hotels)}", field="hotel_ids"
            )
        unknown_departments = wanted_departments - await self._department_repo.live_ids(
            wanted_departments
        )
        if unknown_departments:
            raise ValidationException(
                f"Unknown department ids: {sorted(unknown_departments)}",
                field="department_ids",
            )
        await self._scope_directory.replace_scope(
            user_id, set(hotel_ids), set(department_ids), set(pairs)
        )
        return Restricted(
            hotel_ids=frozenset(hotel_ids),
            department_ids=frozenset(department_ids),
            hotel_dept_pairs=frozenset(pairs),
        )
