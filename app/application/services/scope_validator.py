"""Cross-entity scope validation: re-check referenced parents under the current scope."""

from __future__ import annotations

from app.application.interfaces.repositories import IContactScopeLookup
from app.application.services.scope_filter_compiler import (
    CARD_FIELDS,
    CONTACT_FIELDS,
    compile_scope_filter,
)
from app.domain.exceptions import AuthorizationException
from app.domain.value_objects.scope import Scope


class CrossEntityScopeValidator:
    """Checks that a parent entity referenced by a write is visible to the actor.

    Always evaluated against the scope of the current request, never against
    whatever scope the child was created under. Call before issuing any write
    so a rejection leaves storage untouched.
    """

    def __init__(self, lookup: IContactScopeLookup) -> None:
        self.lookup = lookup

    async def contact_in_scope(self, contact_id: int, scope: Scope) -> bool:
        """True if a non-deleted contact with this id is visible under scope."""
        predicate = compile_scope_filter(scope, CONTACT_FIELDS)
        return await self.lookup.contact_matches(contact_id, predicate)

    async def card_in_scope(self, card_id: int, scope: Scope) -> bool:
        """True if a non-deleted card is visible through its contact under scope."""
        predicate = compile_scope_filter(scope, CARD_FIELDS)
        return await self.lookup.card_matches(card_id, predicate)

    def attribution_in_scope(
        self, hotel_id: int, department_id: int, scope: Scope
    ) -> bool:
        """True if a contact attributed to (hotel_id, department_id) would be visible."""
        predicate = compile_scope_filter(scope, CONTACT_FIELDS)
        return predicate.matches({"hotel_id": hotel_id, "department_id": department_id})

    async def require_contact(self, contact_id: int, scope: Scope) -> None:
        """Raise AuthorizationException if the contact is not in scope."""
        if not await self.contact_in_scope(contact_id, scope):
            raise AuthorizationException(
                message="Contact is out of scope",
                details={"contact_id": contact_id},
            )

    async def require_card(self, card_id: int, scope: Scope) -> None:
        """Raise AuthorizationException if the card's contact is not in scope."""
        if not await self.card_in_scope(card_id, scope):
            raise AuthorizationException(
                message="Card is out of scope",
                details={"card_id": card_id},
            )

    def require_attribution(self, hotel_id: int, department_id: int, scope: Scope) -> None:
        """Raise AuthorizationException if the hotel/department pair is not in scope."""
        if not self.attribution_in_scope(hotel_id, department_id, scope):
            raise AuthorizationException(
                message="Hotel or department is out of scope",
                details={"hotel_id": hotel_id, "department_id": department_id},
            )
