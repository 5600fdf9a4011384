"""Roles API: list, get, create, update, delete, and role-permissions (ROLE_MANAGE)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CurrentPrincipal,
    audited,
    get_role_service,
    get_role_service_for_write,
    require_permission,
    snapshot_with,
)
from app.application.services import RoleService
from app.application.services.audit_recorder import AuditTrail
from app.core.limiter import limit_writes
from app.domain.enums import PermissionKey
from app.infrastructure.persistence.repositories import RoleRepository
from app.infrastructure.persistence.repositories.base import serialize_row
from app.schemas.permission import PermissionResponse
from app.schemas.role import (
    RoleCreateRequest,
    RolePermissionAssign,
    RolePermissionAssignedResponse,
    RolePermissionsReplace,
    RoleResponse,
    RoleUpdate,
)
from app.shared.enums import AuditAction, AuditEntityType

router = APIRouter()

_role_snapshot = snapshot_with(RoleRepository)
_manage_roles = require_permission(PermissionKey.ROLE_MANAGE)


def _permission_ids(permissions) -> list[int]:
    return sorted(p.id for p in permissions)


@router.get("", response_model=list[RoleResponse])
async def list_roles(
    service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(_manage_roles)] = None,
):
    """List live roles with the number of users holding each."""
    return [RoleResponse.model_validate(r) for r in await service.list_roles()]


@router.post("", response_model=RoleResponse, status_code=201)
@limit_writes
async def create_role(
    request: Request,
    body: RoleCreateRequest,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(AuditAction.ROLE_CREATE, AuditEntityType.ROLE, PermissionKey.ROLE_MANAGE)
        ),
    ],
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
):
    """Create a role, optionally with its initial permission ids."""
    role = await service.create_role(body.name, body.description, body.permission_ids)
    response = RoleResponse.model_validate(role)
    trail.record_result(
        entity_id=role.id,
        new_values={
            **response.model_dump(mode="json"),
            "permission_ids": sorted(set(body.permission_ids)),
        },
        status_code=201,
    )
    return response


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: int,
    service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(_manage_roles)] = None,
):
    return RoleResponse.model_validate(await service.get_role(role_id))


@router.put("/{role_id}", response_model=RoleResponse)
@limit_writes
async def update_role(
    request: Request,
    role_id: int,
    body: RoleUpdate,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.ROLE_EDIT,
                AuditEntityType.ROLE,
                PermissionKey.ROLE_MANAGE,
                entity_param="role_id",
                snapshot=_role_snapshot,
            )
        ),
    ],
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
):
    """Rename and/or re-describe a role. 400 when nothing is sent."""
    role = await service.update_role(role_id, body.name, body.description)
    response = RoleResponse.model_validate(role)
    trail.record_result(new_values=response.model_dump(mode="json"))
    return response


@router.delete("/{role_id}", status_code=204)
@limit_writes
async def delete_role(
    request: Request,
    role_id: int,
    principal: CurrentPrincipal,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.ROLE_DELETE,
                AuditEntityType.ROLE,
                PermissionKey.ROLE_MANAGE,
                entity_param="role_id",
                snapshot=_role_snapshot,
            )
        ),
    ],
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
):
    """Soft-delete a role. Admin roles cannot be deleted."""
    role = await service.delete_role(role_id, deleted_by=principal.user_id)
    trail.record_result(new_values=serialize_row(role), status_code=204)


@router.get("/{role_id}/permissions", response_model=list[PermissionResponse])
async def list_role_permissions(
    role_id: int,
    service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(_manage_roles)] = None,
):
    permissions = await service.list_role_permissions(role_id)
    return [PermissionResponse.model_validate(p) for p in permissions]


@router.put("/{role_id}/permissions", response_model=list[PermissionResponse])
@limit_writes
async def replace_role_permissions(
    request: Request,
    role_id: int,
    body: RolePermissionsReplace,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.ROLE_PERMISSIONS_BULK_UPDATE,
                AuditEntityType.ROLE,
                PermissionKey.ROLE_MANAGE,
                entity_param="role_id",
            )
        ),
    ],
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
):
    """Replace the role's permission set in one transaction; an empty list clears it."""
    before = await service.list_role_permissions(role_id)
    permissions = await service.set_role_permissions(role_id, body.permission_ids)
    trail.old_values = {"permission_ids": _permission_ids(before)}
    trail.record_result(new_values={"permission_ids": _permission_ids(permissions)})
    return [PermissionResponse.model_validate(p) for p in permissions]


@router.post(
    "/{role_id}/permissions",
    response_model=RolePermissionAssignedResponse,
    status_code=201,
)
@limit_writes
async def assign_role_permission(
    request: Request,
    role_id: int,
    body: RolePermissionAssign,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.ROLE_PERMISSION_ASSIGN,
                AuditEntityType.ROLE_PERMISSION,
                PermissionKey.ROLE_MANAGE,
                entity_param="role_id",
            )
        ),
    ],
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
):
    """Add one permission to a role; 409 if the role already holds it."""
    await service.assign_permission(role_id, body.permission_id)
    response = RolePermissionAssignedResponse(
        role_id=role_id, permission_id=body.permission_id
    )
    trail.record_result(new_values=response.model_dump(), status_code=201)
    return response


@router.delete("/{role_id}/permissions/{permission_id}", status_code=204)
@limit_writes
async def remove_role_permission(
    request: Request,
    role_id: int,
    permission_id: int,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.ROLE_PERMISSION_REMOVE,
                AuditEntityType.ROLE_PERMISSION,
                PermissionKey.ROLE_MANAGE,
                entity_param="role_id",
            )
        ),
    ],
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
):
    await service.remove_permission(role_id, permission_id)
    trail.old_values = {"role_id": role_id, "permission_id": permission_id, "assigned": True}
    trail.record_result(
        new_values={"role_id": role_id, "permission_id": permission_id, "assigned": False},
        status_code=204,
    )
