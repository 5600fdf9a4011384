"""Unit tests for ContactService and CardService: scope is checked before any write."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.services.scope_validator import CrossEntityScopeValidator
from app.application.use_cases.contacts import CardService, ContactService
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects.scope import UNRESTRICTED, make_restricted


def _validator(*, contact_ok: bool = True, card_ok: bool = True) -> CrossEntityScopeValidator:
    lookup = MagicMock()
    lookup.contact_matches = AsyncMock(return_value=contact_ok)
    lookup.card_matches = AsyncMock(return_value=card_ok)
    return CrossEntityScopeValidator(lookup)


def _contact_service(*, hotels=(1,), departments=(1,), existing=None) -> tuple[ContactService, MagicMock]:
    contact_repo = MagicMock()
    contact_repo.create_contact = AsyncMock(side_effect=lambda **kw: SimpleNamespace(id=1, **kw))
    contact_repo.get_scoped = AsyncMock(return_value=existing)
    contact_repo.update = AsyncMock(side_effect=lambda c: c)
    hotel_repo = MagicMock()
    hotel_repo.live_ids = AsyncMock(side_effect=lambda ids: set(ids) & set(hotels))
    department_repo = MagicMock()
    department_repo.live_ids = AsyncMock(side_effect=lambda ids: set(ids) & set(departments))
    service = ContactService(contact_repo, hotel_repo, department_repo, _validator())
    return service, contact_repo


async def test_create_in_scope_contact() -> None:
    service, repo = _contact_service()
    scope = make_restricted(hotel_ids=[1], department_ids=[1])
    contact = await service.create_contact(
        scope, {"name": " Jane ", "hotel_id": 1, "department_id": 1, "bogus": "x"}
    )
    assert contact.name == "Jane"
    repo.create_contact.assert_awaited_once_with(name="Jane", hotel_id=1, department_id=1)


async def test_out_of_scope_create_is_refused_before_existence_check() -> None:
    """Unknown ids outside scope surface as 403, never as a validation error."""
    service, repo = _contact_service(hotels=(), departments=())
    scope = make_restricted(hotel_ids=[1], department_ids=[1])
    with pytest.raises(AuthorizationException):
        await service.create_contact(scope, {"name": "X", "hotel_id": 2, "department_id": 1})
    repo.create_contact.assert_not_awaited()
    service.hotel_repo.live_ids.assert_not_awaited()


async def test_empty_scope_cannot_create() -> None:
    service, repo = _contact_service()
    with pytest.raises(AuthorizationException):
        await service.create_contact(
            make_restricted(), {"name": "X", "hotel_id": 1, "department_id": 1}
        )
    repo.create_contact.assert_not_awaited()


async def test_in_scope_create_with_deleted_hotel_is_validation_error() -> None:
    service, repo = _contact_service(hotels=())
    with pytest.raises(ValidationException):
        await service.create_contact(
            UNRESTRICTED, {"name": "X", "hotel_id": 1, "department_id": 1}
        )
    repo.create_contact.assert_not_awaited()


async def test_blank_name_rejected() -> None:
    service, _ = _contact_service()
    with pytest.raises(ValidationException):
        await service.create_contact(UNRESTRICTED, {"name": " ", "hotel_id": 1, "department_id": 1})


async def test_move_out_of_scope_refused() -> None:
    existing = SimpleNamespace(id=1, name="Jane", hotel_id=1, department_id=1)
    service, repo = _contact_service(hotels=(1, 2), existing=existing)
    scope = make_restricted(hotel_ids=[1], department_ids=[1])
    with pytest.raises(AuthorizationException):
        await service.update_contact(scope, 1, {"hotel_id": 2})
    repo.update.assert_not_awaited()
    assert existing.hotel_id == 1


async def test_update_hidden_contact_is_not_found() -> None:
    service, _ = _contact_service(existing=None)
    with pytest.raises(ResourceNotFoundException):
        await service.update_contact(make_restricted(hotel_ids=[1]), 9, {"name": "Y"})


def _card_service(*, contact_ok: bool, card_ok: bool = True) -> tuple[CardService, MagicMock]:
    card_repo = MagicMock()
    card_repo.create_card = AsyncMock(side_effect=lambda **kw: SimpleNamespace(id=3, **kw))
    card_repo.require_live = AsyncMock(
        return_value=SimpleNamespace(id=3, contact_id=1, label="Phone", value="1", notes=None)
    )
    card_repo.update = AsyncMock(side_effect=lambda c: c)
    card_repo.soft_delete = AsyncMock()
    validator = _validator(contact_ok=contact_ok, card_ok=card_ok)
    return CardService(card_repo, validator), card_repo


async def test_card_under_out_of_scope_contact_refused() -> None:
    service, repo = _card_service(contact_ok=False)
    with pytest.raises(AuthorizationException):
        await service.create_card(
            make_restricted(hotel_ids=[1]), {"contact_id": 8, "label": "Phone", "value": "1"}
        )
    repo.create_card.assert_not_awaited()


async def test_card_under_in_scope_contact_created() -> None:
    service, repo = _card_service(contact_ok=True)
    card = await service.create_card(
        UNRESTRICTED, {"contact_id": 1, "label": " Phone ", "value": "555"}
    )
    assert card.label == "Phone"
    repo.create_card.assert_awaited_once_with(contact_id=1, label="Phone", value="555", notes=None)


async def test_out_of_scope_card_delete_refused() -> None:
    service, repo = _card_service(contact_ok=True, card_ok=False)
    with pytest.raises(AuthorizationException):
        await service.delete_card(make_restricted(hotel_ids=[1]), 3, deleted_by=1)
    repo.soft_delete.assert_not_awaited()
    repo.require_live.assert_not_awaited()


async def test_unknown_card_update_is_refused_like_a_hidden_one() -> None:
    """Scope is checked before existence, so a missing id gives the same 403."""
    service, repo = _card_service(contact_ok=True, card_ok=False)
    with pytest.raises(AuthorizationException, match="Card is out of scope"):
        await service.update_card(make_restricted(hotel_ids=[1]), 404, {"label": "Fax"})
    repo.require_live.assert_not_awaited()
    repo.update.assert_not_awaited()


async def test_card_move_to_out_of_scope_contact_refused() -> None:
    service, repo = _card_service(contact_ok=False, card_ok=True)
    with pytest.raises(AuthorizationException, match="Contact is out of scope"):
        await service.update_card(
            make_restricted(hotel_ids=[1]), 3, {"contact_id": 8, "label": "Moved"}
        )
    repo.update.assert_not_awaited()
    card = repo.require_live.return_value
    assert (card.contact_id, card.label) == (1, "Phone")


async def test_card_update_within_scope_keeps_contact() -> None:
    service, repo = _card_service(contact_ok=False, card_ok=True)
    card = await service.update_card(
        make_restricted(hotel_ids=[1]), 3, {"contact_id": 1, "label": " Mobile "}
    )
    assert card.label == "Mobile"
    service.validator.lookup.contact_matches.assert_not_awaited()


async def test_card_list_for_hidden_contact_is_not_found() -> None:
    service, _ = _card_service(contact_ok=False)
    with pytest.raises(ResourceNotFoundException):
        await service.list_contact_cards(make_restricted(hotel_ids=[1]), 8)
