"""Permissions API: the catalog of permission keys (ROLE_MANAGE)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    audited,
    get_permission_service,
    get_permission_service_for_write,
    require_permission,
    snapshot_with,
)
from app.application.services import PermissionService
from app.application.services.audit_recorder import AuditTrail
from app.core.limiter import limit_writes
from app.domain.enums import PermissionKey
from app.infrastructure.persistence.repositories import PermissionRepository
from app.schemas.permission import PermissionCreate, PermissionResponse
from app.shared.enums import AuditAction, AuditEntityType

router = APIRouter()


@router.get("", response_model=list[PermissionResponse])
async def list_permissions(
    service: Annotated[PermissionService, Depends(get_permission_service)],
    _: Annotated[object, Depends(require_permission(PermissionKey.ROLE_MANAGE))] = None,
):
    """List all permissions ordered by module and action."""
    return [PermissionResponse.model_validate(p) for p in await service.list_permissions()]


@router.post("", response_model=PermissionResponse, status_code=201)
@limit_writes
async def create_permission(
    request: Request,
    body: PermissionCreate,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.PERMISSION_CREATE,
                AuditEntityType.PERMISSION,
                PermissionKey.ROLE_MANAGE,
            )
        ),
    ],
    service: Annotated[PermissionService, Depends(get_permission_service_for_write)],
):
    """Create a permission key. 409 if the key already exists."""
    permission = await service.create_permission(
        body.perm_key, body.module_name, body.action_name
    )
    response = PermissionResponse.model_validate(permission)
    trail.record_result(
        entity_id=permission.id,
        new_values=response.model_dump(mode="json"),
        status_code=201,
    )
    return response


@router.delete("/{permission_id}", status_code=204)
@limit_writes
async def delete_permission(
    request: Request,
    permission_id: int,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.PERMISSION_DELETE,
                AuditEntityType.PERMISSION,
                PermissionKey.ROLE_MANAGE,
                entity_param="permission_id",
                snapshot=snapshot_with(PermissionRepository),
            )
        ),
    ],
    service: Annotated[PermissionService, Depends(get_permission_service_for_write)],
):
    """Delete a permission no live role holds; 409 while it is still assigned."""
    await service.delete_permission(permission_id)
    trail.record_result(new_values={"id": permission_id, "deleted": True}, status_code=204)
