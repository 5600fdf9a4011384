"""Unit tests for CrossEntityScopeValidator with an in-memory contact lookup."""

import pytest

from app.application.services.scope_validator import CrossEntityScopeValidator
from app.domain.exceptions import AuthorizationException
from app.domain.value_objects.scope import UNRESTRICTED, make_restricted


class FakeContactLookup:
    """Contacts keyed by id as (hotel_id, department_id); cards map to contact ids."""

    def __init__(self, contacts: dict[int, tuple[int, int]], cards: dict[int, int]) -> None:
        self.contacts = contacts
        self.cards = cards

    async def contact_matches(self, contact_id, predicate) -> bool:
        attribution = self.contacts.get(contact_id)
        if attribution is None:
            return False
        hotel_id, department_id = attribution
        return predicate.matches({"hotel_id": hotel_id, "department_id": department_id})

    async def card_matches(self, card_id, predicate) -> bool:
        contact_id = self.cards.get(card_id)
        return contact_id is not None and await self.contact_matches(contact_id, predicate)


@pytest.fixture
def validator() -> CrossEntityScopeValidator:
    return CrossEntityScopeValidator(
        FakeContactLookup(contacts={1: (1, 1), 2: (2, 1)}, cards={10: 1, 20: 2})
    )


async def test_contact_in_scope(validator: CrossEntityScopeValidator) -> None:
    scope = make_restricted(hotel_ids=[1], department_ids=[1])
    assert await validator.contact_in_scope(1, scope)
    assert not await validator.contact_in_scope(2, scope)


async def test_missing_contact_is_never_in_scope(validator: CrossEntityScopeValidator) -> None:
    assert not await validator.contact_in_scope(99, UNRESTRICTED)


async def test_require_contact_raises_for_out_of_scope(
    validator: CrossEntityScopeValidator,
) -> None:
    scope = make_restricted(hotel_ids=[1])
    with pytest.raises(AuthorizationException) as exc_info:
        await validator.require_contact(2, scope)
    assert exc_info.value.details == {"contact_id": 2}


async def test_card_follows_its_contact(validator: CrossEntityScopeValidator) -> None:
    scope = make_restricted(hotel_ids=[2])
    assert await validator.card_in_scope(20, scope)
    assert not await validator.card_in_scope(10, scope)
    with pytest.raises(AuthorizationException):
        await validator.require_card(10, scope)


def test_attribution_checked_in_memory(validator: CrossEntityScopeValidator) -> None:
    scope = make_restricted(hotel_ids=[1], department_ids=[2])
    assert validator.attribution_in_scope(1, 2, scope)
    assert not validator.attribution_in_scope(1, 3, scope)
    with pytest.raises(AuthorizationException):
        validator.require_attribution(3, 2, scope)


def test_empty_scope_rejects_every_attribution(validator: CrossEntityScopeValidator) -> None:
    with pytest.raises(AuthorizationException):
        validator.require_attribution(1, 1, make_restricted())
