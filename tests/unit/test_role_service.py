"""Unit tests for RoleService with mocked repositories."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.services.role_service import RoleService
from app.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)


def _service(
    *, existing=None, permissions=(), role=None
) -> tuple[RoleService, MagicMock, MagicMock, MagicMock]:
    role_repo = MagicMock()
    role_repo.get_by_name = AsyncMock(return_value=existing)
    role_repo.create_role = AsyncMock(return_value=SimpleNamespace(id=5, name="AUDITOR"))
    role_repo.require_live = AsyncMock(
        return_value=role or SimpleNamespace(id=5, name="AUDITOR", description=None)
    )
    role_repo.update = AsyncMock(side_effect=lambda r: r)
    role_repo.soft_delete = AsyncMock(side_effect=lambda r, deleted_by=None: r)
    permission_repo = MagicMock()
    permission_repo.get_by_ids = AsyncMock(
        return_value=[SimpleNamespace(id=i) for i in permissions]
    )
    permission_repo.get_by_id = AsyncMock(return_value=None)
    permission_repo.get_permissions_for_role = AsyncMock(return_value=[])
    links = MagicMock()
    links.set_role_permissions = AsyncMock()
    links.remove_permission_from_role = AsyncMock(return_value=False)
    return RoleService(role_repo, permission_repo, links), role_repo, permission_repo, links


async def test_create_role_with_permissions_sets_them() -> None:
    service, role_repo, _, links = _service(permissions=(1, 2))
    role = await service.create_role("  AUDITOR ", permission_ids=[1, 2])
    assert role.id == 5
    role_repo.create_role.assert_awaited_once_with(name="AUDITOR", description=None)
    links.set_role_permissions.assert_awaited_once_with(5, {1, 2})


async def test_create_role_duplicate_name_conflicts() -> None:
    service, role_repo, _, _ = _service(existing=SimpleNamespace(id=1, name="AUDITOR"))
    with pytest.raises(ConflictException):
        await service.create_role("AUDITOR")
    role_repo.create_role.assert_not_awaited()


async def test_create_role_blank_name_rejected() -> None:
    service, _, _, _ = _service()
    with pytest.raises(ValidationException):
        await service.create_role("   ")


async def test_unknown_permission_ids_rejected_before_replace() -> None:
    service, _, _, links = _service(permissions=(1,))
    with pytest.raises(ValidationException) as exc_info:
        await service.set_role_permissions(5, [1, 9])
    assert "9" in exc_info.value.message
    links.set_role_permissions.assert_not_awaited()


async def test_empty_permission_set_clears_role() -> None:
    service, _, _, links = _service()
    assert await service.set_role_permissions(5, []) == []
    links.set_role_permissions.assert_awaited_once_with(5, set())


async def test_admin_role_cannot_be_deleted() -> None:
    service, role_repo, _, _ = _service(role=SimpleNamespace(id=1, name="ADMIN"))
    with pytest.raises(ValidationException):
        await service.delete_role(1, deleted_by=2)
    role_repo.soft_delete.assert_not_awaited()


async def test_update_without_changes_rejected() -> None:
    service, _, _, _ = _service()
    with pytest.raises(ValidationException):
        await service.update_role(5)


async def test_assign_unknown_permission_is_not_found() -> None:
    service, _, _, _ = _service()
    with pytest.raises(ResourceNotFoundException):
        await service.assign_permission(5, 42)


async def test_remove_missing_assignment_is_not_found() -> None:
    service, _, _, links = _service()
    with pytest.raises(ResourceNotFoundException):
        await service.remove_permission(5, 42)
    links.remove_permission_from_role.assert_awaited_once_with(5, 42)
