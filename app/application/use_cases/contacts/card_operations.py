"""Card operations. A card's visibility is its contact's visibility."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.application.services.scope_filter_compiler import CARD_FIELDS, compile_scope_filter
from app.application.services.scope_validator import CrossEntityScopeValidator
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.domain.value_objects.scope import Scope

CARD_FIELD_NAMES = ("contact_id", "label", "value", "notes")


class CardService:
    """Cards are read through their contact's scope and written only under an in-scope contact."""

    def __init__(self, card_repo: Any, validator: CrossEntityScopeValidator) -> None:
        self.card_repo = card_repo
        self.validator = validator

    async def list_cards(
        self,
        scope: Scope,
        *,
        contact_id: int | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Any]:
        return await self.card_repo.list_scoped(
            compile_scope_filter(scope, CARD_FIELDS),
            contact_id=contact_id,
            skip=skip,
            limit=limit,
        )

    async def list_contact_cards(
        self, scope: Scope, contact_id: int, *, skip: int = 0, limit: int = 100
    ) -> list[Any]:
        """Cards of one contact; the contact itself must be visible."""
        if not await self.validator.contact_in_scope(contact_id, scope):
            raise ResourceNotFoundException("contact", contact_id)
        return await self.list_cards(scope, contact_id=contact_id, skip=skip, limit=limit)

    async def get_card(self, scope: Scope, card_id: int) -> Any:
        card = await self.card_repo.get_scoped(
            card_id, compile_scope_filter(scope, CARD_FIELDS)
        )
        if card is None:
            raise ResourceNotFoundException("card", card_id)
        return card

    async def create_card(self, scope: Scope, fields: Mapping[str, Any]) -> Any:
        """Create a card under an in-scope contact (AuthorizationException otherwise)."""
        data = {k: v for k, v in fields.items() if k in CARD_FIELD_NAMES}
        if not (data.get("label") or "").strip():
            raise ValidationException("Card label is required", field="label")
        await self.validator.require_contact(data["contact_id"], scope)
        return await self.card_repo.create_card(
            contact_id=data["contact_id"],
            label=data["label"].strip(),
            value=data.get("value") or "",
            notes=data.get("notes"),
        )

    async def update_card(
        self, scope: Scope, card_id: int, changes: Mapping[str, Any]
    ) -> Any:
        """Update a card. Both its current contact and a new contact must be in scope.

        The scope check runs first, so a missing card and a hidden one are
        refused alike.
        """
        await self.validator.require_card(card_id, scope)
        card = await self.card_repo.require_live(card_id)
        data = {k: v for k, v in changes.items() if k in CARD_FIELD_NAMES}
        new_contact_id = data.get("contact_id")
        if new_contact_id is not None and new_contact_id != card.contact_id:
            await self.validator.require_contact(new_contact_id, scope)
        if "label" in data:
            if not (data["label"] or "").strip():
                raise ValidationException("Card label is required", field="label")
            data["label"] = data["label"].strip()
        for key, value in data.items():
            if value is not None or key == "notes":
                setattr(card, key, value)
        return await self.card_repo.update(card)

    async def delete_card(
        self, scope: Scope, card_id: int, deleted_by: int | None = None
    ) -> Any:
        await self.validator.require_card(card_id, scope)
        card = await self.card_repo.require_live(card_id)
        return await self.card_repo.soft_delete(card, deleted_by=deleted_by)
