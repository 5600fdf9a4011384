"""Departments API: scoped list/get and lifecycle."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CurrentPrincipal,
    CurrentScope,
    audited,
    get_department_service,
    get_department_service_for_write,
    require_permission,
    scoped_snapshot_with,
)
from app.application.services.audit_recorder import AuditTrail
from app.application.services.scope_filter_compiler import DEPARTMENT_FIELDS
from app.application.use_cases.organization import DepartmentService
from app.core.limiter import limit_writes
from app.domain.enums import PermissionKey
from app.infrastructure.persistence.repositories import DepartmentRepository
from app.infrastructure.persistence.repositories.base import serialize_row
from app.schemas.organization import (
    DepartmentCreate,
    DepartmentResponse,
    DepartmentUpdate,
)
from app.shared.enums import AuditAction, AuditEntityType

router = APIRouter()

_department_snapshot = scoped_snapshot_with(DepartmentRepository, DEPARTMENT_FIELDS)

_view_departments = require_permission(
    PermissionKey.DEPARTMENT_VIEW,
    PermissionKey.CONTACT_VIEW,
    PermissionKey.CONTACT_CREATE,
    PermissionKey.CONTACT_EDIT,
)


def _audited_edit(action: AuditAction, key: PermissionKey):
    return audited(
        action,
        AuditEntityType.DEPARTMENT,
        key,
        entity_param="department_id",
        snapshot=_department_snapshot,
    )


@router.get("", response_model=list[DepartmentResponse])
async def list_departments(
    scope: CurrentScope,
    service: Annotated[DepartmentService, Depends(get_department_service)],
    _: Annotated[object, Depends(_view_departments)] = None,
):
    """List departments visible under the caller's scope."""
    departments = await service.list_departments(scope)
    return [DepartmentResponse.model_validate(d) for d in departments]


@router.post("", response_model=DepartmentResponse, status_code=201)
@limit_writes
async def create_department(
    request: Request,
    body: DepartmentCreate,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.DEPARTMENT_CREATE,
                AuditEntityType.DEPARTMENT,
                PermissionKey.DEPARTMENT_CREATE,
            )
        ),
    ],
    service: Annotated[DepartmentService, Depends(get_department_service_for_write)],
):
    """Create a department. 409 if a live department has the same name."""
    department = await service.create_department(body.name, body.description)
    response = DepartmentResponse.model_validate(department)
    trail.record_result(
        entity_id=department.id,
        new_values=response.model_dump(mode="json"),
        status_code=201,
    )
    return response


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: int,
    scope: CurrentScope,
    service: Annotated[DepartmentService, Depends(get_department_service)],
    _: Annotated[object, Depends(_view_departments)] = None,
):
    """Get one department; 404 when missing, deleted or out of scope."""
    return DepartmentResponse.model_validate(
        await service.get_department(scope, department_id)
    )


@router.put("/{department_id}", response_model=DepartmentResponse)
@limit_writes
async def update_department(
    request: Request,
    department_id: int,
    body: DepartmentUpdate,
    scope: CurrentScope,
    trail: Annotated[
        AuditTrail,
        Depends(_audited_edit(AuditAction.DEPARTMENT_EDIT, PermissionKey.DEPARTMENT_EDIT)),
    ],
    service: Annotated[DepartmentService, Depends(get_department_service_for_write)],
):
    department = await service.update_department(
        scope, department_id, body.name, body.description
    )
    response = DepartmentResponse.model_validate(department)
    trail.record_result(new_values=response.model_dump(mode="json"))
    return response


@router.patch("/{department_id}/toggle-active", response_model=DepartmentResponse)
@limit_writes
async def toggle_department_active(
    request: Request,
    department_id: int,
    scope: CurrentScope,
    trail: Annotated[
        AuditTrail,
        Depends(_audited_edit(AuditAction.DEPARTMENT_EDIT, PermissionKey.DEPARTMENT_EDIT)),
    ],
    service: Annotated[DepartmentService, Depends(get_department_service_for_write)],
):
    department = await service.toggle_active(scope, department_id)
    response = DepartmentResponse.model_validate(department)
    trail.record_result(new_values=response.model_dump(mode="json"))
    return response


@router.delete("/{department_id}", status_code=204)
@limit_writes
async def delete_department(
    request: Request,
    department_id: int,
    scope: CurrentScope,
    principal: CurrentPrincipal,
    trail: Annotated[
        AuditTrail,
        Depends(
            _audited_edit(AuditAction.DEPARTMENT_DELETE, PermissionKey.DEPARTMENT_DELETE)
        ),
    ],
    service: Annotated[DepartmentService, Depends(get_department_service_for_write)],
):
    """Soft-delete a department (terminal)."""
    department = await service.delete_department(
        scope, department_id, deleted_by=principal.user_id
    )
    trail.record_result(new_values=serialize_row(department), status_code=204)
