"""Cards API. Cards are visible and writable only through an in-scope contact."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    CurrentPrincipal,
    CurrentScope,
    audited,
    get_card_service,
    get_card_service_for_write,
    require_permission,
    scoped_snapshot_with,
)
from app.application.services.audit_recorder import AuditTrail
from app.application.services.scope_filter_compiler import CARD_FIELDS
from app.application.use_cases.contacts import CardService
from app.core.limiter import limit_writes
from app.domain.enums import PermissionKey
from app.infrastructure.persistence.repositories import CardRepository
from app.infrastructure.persistence.repositories.base import serialize_row
from app.schemas.contact import CardCreate, CardResponse, CardUpdate
from app.shared.enums import AuditAction, AuditEntityType

router = APIRouter()

_card_snapshot = scoped_snapshot_with(CardRepository, CARD_FIELDS)


@router.get("", response_model=list[CardResponse])
async def list_cards(
    scope: CurrentScope,
    service: Annotated[CardService, Depends(get_card_service)],
    _: Annotated[object, Depends(require_permission(PermissionKey.CARD_VIEW))] = None,
    contact_id: Annotated[int | None, Query(gt=0)] = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List cards whose contact is visible, optionally for one contact."""
    cards = await service.list_cards(scope, contact_id=contact_id, skip=skip, limit=limit)
    return [CardResponse.model_validate(c) for c in cards]


@router.post("", response_model=CardResponse, status_code=201)
@limit_writes
async def create_card(
    request: Request,
    body: CardCreate,
    scope: CurrentScope,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(AuditAction.CARD_CREATE, AuditEntityType.CARD, PermissionKey.CARD_CREATE)
        ),
    ],
    service: Annotated[CardService, Depends(get_card_service_for_write)],
):
    """Create a card. 403 if the contact is missing, deleted or out of scope."""
    card = await service.create_card(scope, body.model_dump())
    response = CardResponse.model_validate(card)
    trail.record_result(
        entity_id=card.id, new_values=response.model_dump(mode="json"), status_code=201
    )
    return response


@router.get("/{card_id}", response_model=CardResponse)
async def get_card(
    card_id: int,
    scope: CurrentScope,
    service: Annotated[CardService, Depends(get_card_service)],
    _: Annotated[object, Depends(require_permission(PermissionKey.CARD_VIEW))] = None,
):
    return CardResponse.model_validate(await service.get_card(scope, card_id))


@router.put("/{card_id}", response_model=CardResponse)
@limit_writes
async def update_card(
    request: Request,
    card_id: int,
    body: CardUpdate,
    scope: CurrentScope,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.CARD_EDIT,
                AuditEntityType.CARD,
                PermissionKey.CARD_EDIT,
                entity_param="card_id",
                snapshot=_card_snapshot,
            )
        ),
    ],
    service: Annotated[CardService, Depends(get_card_service_for_write)],
):
    card = await service.update_card(scope, card_id, body.model_dump(exclude_unset=True))
    response = CardResponse.model_validate(card)
    trail.record_result(new_values=response.model_dump(mode="json"))
    return response


@router.delete("/{card_id}", status_code=204)
@limit_writes
async def delete_card(
    request: Request,
    card_id: int,
    scope: CurrentScope,
    principal: CurrentPrincipal,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.CARD_DELETE,
                AuditEntityType.CARD,
                PermissionKey.CARD_DELETE,
                entity_param="card_id",
                snapshot=_card_snapshot,
            )
        ),
    ],
    service: Annotated[CardService, Depends(get_card_service_for_write)],
):
    card = await service.delete_card(scope, card_id, deleted_by=principal.user_id)
    trail.record_result(new_values=serialize_row(card), status_code=204)
