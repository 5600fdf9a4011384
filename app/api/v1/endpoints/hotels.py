"""Hotels API: scoped list/get, lifecycle, and hotel-department links."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CurrentPrincipal,
    CurrentScope,
    audited,
    get_hotel_service,
    get_hotel_service_for_write,
    require_permission,
    scoped_snapshot_with,
)
from app.application.services.audit_recorder import AuditTrail
from app.application.services.scope_filter_compiler import HOTEL_FIELDS
from app.application.use_cases.organization import HotelService
from app.core.limiter import limit_writes
from app.domain.enums import PermissionKey
from app.infrastructure.persistence.repositories import HotelRepository
from app.infrastructure.persistence.repositories.base import serialize_row
from app.schemas.organization import (
    DepartmentResponse,
    HotelCreate,
    HotelDepartmentLink,
    HotelDepartmentsSync,
    HotelResponse,
    HotelUpdate,
)
from app.shared.enums import AuditAction, AuditEntityType

router = APIRouter()

_hotel_snapshot = scoped_snapshot_with(HotelRepository, HOTEL_FIELDS)


@router.get("", response_model=list[HotelResponse])
async def list_hotels(
    scope: CurrentScope,
    service: Annotated[HotelService, Depends(get_hotel_service)],
    _: Annotated[
        object,
        Depends(
            require_permission(
                PermissionKey.HOTEL_VIEW,
                PermissionKey.CONTACT_VIEW,
                PermissionKey.CONTACT_CREATE,
                PermissionKey.CONTACT_EDIT,
            )
        ),
    ] = None,
):
    """List hotels visible under the caller's scope (active and inactive)."""
    hotels = await service.list_hotels(scope)
    return [HotelResponse.model_validate(h) for h in hotels]


@router.post("", response_model=HotelResponse, status_code=201)
@limit_writes
async def create_hotel(
    request: Request,
    body: HotelCreate,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(AuditAction.HOTEL_CREATE, AuditEntityType.HOTEL, PermissionKey.HOTEL_CREATE)
        ),
    ],
    service: Annotated[HotelService, Depends(get_hotel_service_for_write)],
):
    """Create a hotel. 409 if a live hotel has the same name and location."""
    hotel = await service.create_hotel(body.name, body.location)
    response = HotelResponse.model_validate(hotel)
    trail.record_result(
        entity_id=hotel.id, new_values=response.model_dump(mode="json"), status_code=201
    )
    return response


@router.get("/departments/links", response_model=list[HotelDepartmentLink])
async def list_hotel_department_links(
    scope: CurrentScope,
    service: Annotated[HotelService, Depends(get_hotel_service)],
    _: Annotated[
        object,
        Depends(
            require_permission(
                PermissionKey.HOTEL_VIEW,
                PermissionKey.DEPARTMENT_VIEW,
                PermissionKey.CONTACT_VIEW,
            )
        ),
    ] = None,
):
    """All links for admins; a restricted caller's own hotel-department pairs otherwise."""
    links = await service.list_links(scope)
    return [
        HotelDepartmentLink(hotel_id=p.hotel_id, department_id=p.department_id)
        for p in links
    ]


@router.get("/{hotel_id}", response_model=HotelResponse)
async def get_hotel(
    hotel_id: int,
    scope: CurrentScope,
    service: Annotated[HotelService, Depends(get_hotel_service)],
    _: Annotated[
        object,
        Depends(
            require_permission(
                PermissionKey.HOTEL_VIEW,
                PermissionKey.CONTACT_VIEW,
                PermissionKey.CONTACT_CREATE,
                PermissionKey.CONTACT_EDIT,
            )
        ),
    ] = None,
):
    """Get one hotel; 404 when missing, deleted or out of scope."""
    return HotelResponse.model_validate(await service.get_hotel(scope, hotel_id))


@router.put("/{hotel_id}", response_model=HotelResponse)
@limit_writes
async def update_hotel(
    request: Request,
    hotel_id: int,
    body: HotelUpdate,
    scope: CurrentScope,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.HOTEL_EDIT,
                AuditEntityType.HOTEL,
                PermissionKey.HOTEL_EDIT,
                entity_param="hotel_id",
                snapshot=_hotel_snapshot,
            )
        ),
    ],
    service: Annotated[HotelService, Depends(get_hotel_service_for_write)],
):
    """Update name and/or location."""
    hotel = await service.update_hotel(scope, hotel_id, body.name, body.location)
    response = HotelResponse.model_validate(hotel)
    trail.record_result(new_values=response.model_dump(mode="json"))
    return response


@router.patch("/{hotel_id}/toggle-active", response_model=HotelResponse)
@limit_writes
async def toggle_hotel_active(
    request: Request,
    hotel_id: int,
    scope: CurrentScope,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.HOTEL_EDIT,
                AuditEntityType.HOTEL,
                PermissionKey.HOTEL_EDIT,
                entity_param="hotel_id",
                snapshot=_hotel_snapshot,
            )
        ),
    ],
    service: Annotated[HotelService, Depends(get_hotel_service_for_write)],
):
    """Flip is_active. Applying it twice restores the original state."""
    hotel = await service.toggle_active(scope, hotel_id)
    response = HotelResponse.model_validate(hotel)
    trail.record_result(new_values=response.model_dump(mode="json"))
    return response


@router.delete("/{hotel_id}", status_code=204)
@limit_writes
async def delete_hotel(
    request: Request,
    hotel_id: int,
    scope: CurrentScope,
    principal: CurrentPrincipal,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.HOTEL_DELETE,
                AuditEntityType.HOTEL,
                PermissionKey.HOTEL_DELETE,
                entity_param="hotel_id",
                snapshot=_hotel_snapshot,
            )
        ),
    ],
    service: Annotated[HotelService, Depends(get_hotel_service_for_write)],
):
    """Soft-delete a hotel (terminal)."""
    hotel = await service.delete_hotel(scope, hotel_id, deleted_by=principal.user_id)
    trail.record_result(new_values=serialize_row(hotel), status_code=204)


@router.get("/{hotel_id}/departments", response_model=list[DepartmentResponse])
async def list_hotel_departments(
    hotel_id: int,
    scope: CurrentScope,
    service: Annotated[HotelService, Depends(get_hotel_service)],
    _: Annotated[
        object,
        Depends(
            require_permission(
                PermissionKey.HOTEL_VIEW,
                PermissionKey.DEPARTMENT_VIEW,
                PermissionKey.CONTACT_VIEW,
            )
        ),
    ] = None,
):
    """Departments linked to a visible hotel."""
    departments = await service.list_departments(scope, hotel_id)
    return [DepartmentResponse.model_validate(d) for d in departments]


@router.put("/{hotel_id}/departments", response_model=list[DepartmentResponse])
@limit_writes
async def sync_hotel_departments(
    request: Request,
    hotel_id: int,
    body: HotelDepartmentsSync,
    scope: CurrentScope,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.HOTEL_EDIT,
                AuditEntityType.HOTEL_DEPARTMENT,
                PermissionKey.HOTEL_EDIT,
                entity_param="hotel_id",
            )
        ),
    ],
    service: Annotated[HotelService, Depends(get_hotel_service_for_write)],
):
    """Replace the hotel's department links (all-or-nothing)."""
    departments = await service.sync_departments(scope, hotel_id, body.department_ids)
    trail.record_result(
        new_values={"hotel_id": hotel_id, "department_ids": sorted(d.id for d in departments)}
    )
    return [DepartmentResponse.model_validate(d) for d in departments]


@router.delete("/{hotel_id}/departments/{department_id}", status_code=204)
@limit_writes
async def unlink_hotel_department(
    request: Request,
    hotel_id: int,
    department_id: int,
    scope: CurrentScope,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.HOTEL_EDIT,
                AuditEntityType.HOTEL_DEPARTMENT,
                PermissionKey.HOTEL_EDIT,
                entity_param="hotel_id",
            )
        ),
    ],
    service: Annotated[HotelService, Depends(get_hotel_service_for_write)],
):
    """Remove one hotel-department link; 404 if it does not exist."""
    await service.unlink_department(scope, hotel_id, department_id)
    trail.record_result(
        new_values={"hotel_id": hotel_id, "department_id": department_id, "linked": False},
        status_code=204,
    )
