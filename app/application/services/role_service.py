"""Role application service: role lifecycle and role-permission assignments."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from app.application.dtos.permission import PermissionResult
from app.application.dtos.role import RoleResult
from app.application.interfaces.repositories import IRolePermissionDirectory
from app.domain.enums import is_admin_role
from app.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)


class RoleService:
    """Create, rename and delete roles; replace or edit their permission sets.

    All writes run in the caller's transaction, so a bulk replace either
    commits whole or leaves the previous set untouched.
    """

    def __init__(
        self,
        role_repo: Any,
        permission_repo: Any,
        role_permission_repo: IRolePermissionDirectory,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._role_permission_repo = role_permission_repo

    async def list_roles(self) -> list[RoleResult]:
        return await self._role_repo.list_with_user_counts()

    async def get_role(self, role_id: int) -> Any:
        return await self._role_repo.require_live(role_id)

    async def create_role(
        self,
        name: str,
        description: str | None = None,
        permission_ids: Iterable[int] | None = None,
    ) -> Any:
        """Create a role and optionally its initial permission set.

        Raises:
            ValidationException: Empty name or unknown permission id.
            ConflictException: A live role already uses the name.
        """
        name = name.strip()
        if not name:
            raise ValidationException("Role name is required", field="name")
        if await self._role_repo.get_by_name(name):
            raise ConflictException(
                "Role with this name already exists", details={"name": name}
            )
        role = await self._role_repo.create_role(name=name, description=description)
        if permission_ids:
            ids = await self._validate_permission_ids(permission_ids)
            await self._role_permission_repo.set_role_permissions(role.id, ids)
        return role

    async def update_role(
        self,
        role_id: int,
        name: str | None = None,
        description: str | None = None,
    ) -> Any:
        """Rename and/or re-describe a live role."""
        if name is None and description is None:
            raise ValidationException("No changes made")
        role = await self._role_repo.require_live(role_id)
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationException("Role name is required", field="name")
            if await self._role_repo.get_by_name(name, exclude_id=role_id):
                raise ConflictException(
                    "Role with this name already exists", details={"name": name}
                )
            role.name = name
        if description is not None:
            role.description = description
        return await self._role_repo.update(role)

    async def delete_role(self, role_id: int, deleted_by: int | None = None) -> Any:
        """Soft-delete a role. Admin bypass roles cannot be deleted."""
        role = await self._role_repo.require_live(role_id)
        if is_admin_role(role.name):
            raise ValidationException("Cannot delete admin role", field="name")
        return await self._role_repo.soft_delete(role, deleted_by=deleted_by)

    async def list_role_permissions(self, role_id: int) -> list[PermissionResult]:
        await self._role_repo.require_live(role_id)
        return await self._permission_repo.get_permissions_for_role(role_id)

    async def set_role_permissions(
        self, role_id: int, permission_ids: Iterable[int]
    ) -> list[PermissionResult]:
        """Replace the role's permission set; an empty set clears it."""
        await self._role_repo.require_live(role_id)
        ids = await self._validate_permission_ids(permission_ids)
        await self._role_permission_repo.set_role_permissions(role_id, ids)
        return await self._permission_repo.get_permissions_for_role(role_id)

    async def assign_permission(self, role_id: int, permission_id: int) -> None:
        """Add one permission; DuplicateAssignmentException if already held."""
        await self._role_repo.require_live(role_id)
        if await self._permission_repo.get_by_id(permission_id) is None:
            raise ResourceNotFoundException("permission", permission_id)
        await self._role_permission_repo.assign_permission_to_role(role_id, permission_id)

    async def remove_permission(self, role_id: int, permission_id: int) -> None:
        await self._role_repo.require_live(role_id)
        removed = await self._role_permission_repo.remove_permission_from_role(
            role_id, permission_id
        )
        if not removed:
            raise ResourceNotFoundException(
                "role_permission", f"{role_id}:{permission_id}"
            )

    async def _validate_permission_ids(self, permission_ids: Iterable[int]) -> set[int]:
        ids = set(permission_ids)
        found = {p.id for p in await self._permission_repo.get_by_ids(ids)}
        missing = sorted(ids - found)
        if missing:
            raise ValidationException(
                f"Unknown permission ids: {missing}", field="permission_ids"
            )
        return ids
