"""Contacts API: scoped search, detail, writes, and the contact's cards."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    CurrentPrincipal,
    CurrentScope,
    audited,
    get_card_service,
    get_contact_service,
    get_contact_service_for_write,
    require_permission,
    scoped_snapshot_with,
)
from app.application.services.audit_recorder import AuditTrail
from app.application.services.scope_filter_compiler import CONTACT_FIELDS
from app.application.use_cases.contacts import CardService, ContactService
from app.core.limiter import limit_writes
from app.domain.enums import PermissionKey
from app.infrastructure.persistence.repositories import ContactRepository
from app.infrastructure.persistence.repositories.base import serialize_row
from app.schemas.contact import (
    CardResponse,
    ContactCreate,
    ContactListResponse,
    ContactResponse,
    ContactUpdate,
)
from app.shared.enums import AuditAction, AuditEntityType

router = APIRouter()

_contact_snapshot = scoped_snapshot_with(ContactRepository, CONTACT_FIELDS)


@router.get("", response_model=ContactListResponse)
async def list_contacts(
    scope: CurrentScope,
    service: Annotated[ContactService, Depends(get_contact_service)],
    _: Annotated[object, Depends(require_permission(PermissionKey.CONTACT_VIEW))] = None,
    q: Annotated[str | None, Query(max_length=200)] = None,
    hotel_id: Annotated[int | None, Query(gt=0)] = None,
    department_id: Annotated[int | None, Query(gt=0)] = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """Search contacts by name, position, email or phone within the caller's scope."""
    items, total = await service.list_contacts(
        scope,
        q=q,
        hotel_id=hotel_id,
        department_id=department_id,
        skip=skip,
        limit=limit,
    )
    return ContactListResponse(
        items=[ContactResponse.model_validate(c) for c in items],
        total=total,
        skip=skip,
        limit=limit,
    )


@router.post("", response_model=ContactResponse, status_code=201)
@limit_writes
async def create_contact(
    request: Request,
    body: ContactCreate,
    scope: CurrentScope,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.CONTACT_CREATE,
                AuditEntityType.CONTACT,
                PermissionKey.CONTACT_CREATE,
            )
        ),
    ],
    service: Annotated[ContactService, Depends(get_contact_service_for_write)],
):
    """Create a contact. 403 if the hotel/department attribution is outside the caller's scope."""
    contact = await service.create_contact(scope, body.model_dump())
    response = ContactResponse.model_validate(contact)
    trail.record_result(
        entity_id=contact.id,
        new_values=response.model_dump(mode="json"),
        status_code=201,
    )
    return response


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: int,
    scope: CurrentScope,
    service: Annotated[ContactService, Depends(get_contact_service)],
    _: Annotated[object, Depends(require_permission(PermissionKey.CONTACT_VIEW))] = None,
):
    return ContactResponse.model_validate(await service.get_contact(scope, contact_id))


@router.put("/{contact_id}", response_model=ContactResponse)
@limit_writes
async def update_contact(
    request: Request,
    contact_id: int,
    body: ContactUpdate,
    scope: CurrentScope,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.CONTACT_EDIT,
                AuditEntityType.CONTACT,
                PermissionKey.CONTACT_EDIT,
                entity_param="contact_id",
                snapshot=_contact_snapshot,
            )
        ),
    ],
    service: Annotated[ContactService, Depends(get_contact_service_for_write)],
):
    """Update a visible contact; moving it re-checks the new attribution."""
    contact = await service.update_contact(
        scope, contact_id, body.model_dump(exclude_unset=True)
    )
    response = ContactResponse.model_validate(contact)
    trail.record_result(new_values=response.model_dump(mode="json"))
    return response


@router.delete("/{contact_id}", status_code=204)
@limit_writes
async def delete_contact(
    request: Request,
    contact_id: int,
    scope: CurrentScope,
    principal: CurrentPrincipal,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.CONTACT_DELETE,
                AuditEntityType.CONTACT,
                PermissionKey.CONTACT_DELETE,
                entity_param="contact_id",
                snapshot=_contact_snapshot,
            )
        ),
    ],
    service: Annotated[ContactService, Depends(get_contact_service_for_write)],
):
    contact = await service.delete_contact(scope, contact_id, deleted_by=principal.user_id)
    trail.record_result(new_values=serialize_row(contact), status_code=204)


@router.get("/{contact_id}/cards", response_model=list[CardResponse])
async def list_contact_cards(
    contact_id: int,
    scope: CurrentScope,
    service: Annotated[CardService, Depends(get_card_service)],
    _: Annotated[object, Depends(require_permission(PermissionKey.CARD_VIEW))] = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """Cards of one visible contact; 404 when the contact is not visible."""
    cards = await service.list_contact_cards(scope, contact_id, skip=skip, limit=limit)
    return [CardResponse.model_validate(c) for c in cards]
