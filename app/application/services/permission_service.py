"""Permission application service: catalog create/delete with key normalization."""

from __future__ import annotations

from typing import Any

from app.application.dtos.permission import PermissionResult
from app.domain.enums import normalize_permission_key, split_permission_key
from app.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)

_MSG_DUPLICATE_PERMISSION = "Permission with key '%s' already exists"


class PermissionService:
    """Create and delete permission keys.

    Keys are stored upper-cased; module and action default to the two halves
    of ``MODULE_ACTION``.
    """

    def __init__(self, permission_repo: Any) -> None:
        self._repo = permission_repo

    async def list_permissions(self) -> list[PermissionResult]:
        return await self._repo.list_all()

    async def create_permission(
        self,
        perm_key: str,
        module_name: str | None = None,
        action_name: str | None = None,
    ) -> Any:
        """Create a permission.

        Raises:
            ValidationException: Key not in MODULE_ACTION form.
            ConflictException: Key already exists.
        """
        key = normalize_permission_key(perm_key)
        try:
            default_module, default_action = split_permission_key(key)
        except ValueError as e:
            raise ValidationException(str(e), field="perm_key") from e
        # Duplicate check is best-effort; the unique index still rejects a racing insert.
        if await self._repo.get_by_key(key):
            raise ConflictException(
                _MSG_DUPLICATE_PERMISSION % key, details={"perm_key": key}
            )
        return await self._repo.create_permission(
            perm_key=key,
            module_name=(module_name or default_module).strip().upper(),
            action_name=(action_name or default_action).strip().upper(),
        )

    async def delete_permission(self, permission_id: int) -> None:
        """Hard-delete an unreferenced permission; Conflict while any live role holds it."""
        permission = await self._repo.get_by_id(permission_id)
        if permission is None:
            raise ResourceNotFoundException("permission", permission_id)
        references = await self._repo.count_role_references(permission_id)
        if references:
            raise ConflictException(
                "Permission is assigned to roles and cannot be deleted",
                details={"permission_id": permission_id, "roles": references},
            )
        await self._repo.delete(permission)
