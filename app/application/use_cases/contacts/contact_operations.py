"""Contact operations: scoped search and writes validated against the caller's scope."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.application.services.scope_filter_compiler import (
    CONTACT_FIELDS,
    compile_scope_filter,
)
from app.application.services.scope_validator import CrossEntityScopeValidator
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.domain.value_objects.scope import Scope

# Columns a caller may set on a contact.
CONTACT_FIELD_NAMES = (
    "name",
    "position",
    "email",
    "phone",
    "extension",
    "notes",
    "hotel_id",
    "department_id",
)


class ContactService:
    """Contacts belong to one hotel and one department; both must be inside the caller's scope.

    The attribution check runs before any write so a rejected create or move
    leaves storage untouched.
    """

    def __init__(
        self,
        contact_repo: Any,
        hotel_repo: Any,
        department_repo: Any,
        validator: CrossEntityScopeValidator,
    ) -> None:
        self.contact_repo = contact_repo
        self.hotel_repo = hotel_repo
        self.department_repo = department_repo
        self.validator = validator

    async def list_contacts(
        self,
        scope: Scope,
        *,
        q: str | None = None,
        hotel_id: int | None = None,
        department_id: int | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[list[Any], int]:
        """Return (page, total) of contacts visible under scope."""
        return await self.contact_repo.list_scoped(
            compile_scope_filter(scope, CONTACT_FIELDS),
            q=q,
            hotel_id=hotel_id,
            department_id=department_id,
            skip=skip,
            limit=limit,
        )

    async def get_contact(self, scope: Scope, contact_id: int) -> Any:
        contact = await self.contact_repo.get_scoped(
            contact_id, compile_scope_filter(scope, CONTACT_FIELDS)
        )
        if contact is None:
            raise ResourceNotFoundException("contact", contact_id)
        return contact

    async def create_contact(self, scope: Scope, fields: Mapping[str, Any]) -> Any:
        """Create a contact attributed to (hotel_id, department_id).

        Raises:
            AuthorizationException: The attribution is outside scope.
            ValidationException: Hotel or department missing or deleted.
        """
        data = {k: v for k, v in fields.items() if k in CONTACT_FIELD_NAMES}
        if not (data.get("name") or "").strip():
            raise ValidationException("Contact name is required", field="name")
        data["name"] = data["name"].strip()
        await self._check_attribution(scope, data["hotel_id"], data["department_id"])
        return await self.contact_repo.create_contact(**data)

    async def update_contact(
        self, scope: Scope, contact_id: int, changes: Mapping[str, Any]
    ) -> Any:
        """Apply changes to a visible contact; a move is validated like a create."""
        contact = await self.get_contact(scope, contact_id)
        data = {
            k: v
            for k, v in changes.items()
            if k in CONTACT_FIELD_NAMES
            and not (v is None and k in ("hotel_id", "department_id"))
        }
        if "name" in data:
            if not (data["name"] or "").strip():
                raise ValidationException("Contact name is required", field="name")
            data["name"] = data["name"].strip()
        hotel_id = data.get("hotel_id") or contact.hotel_id
        department_id = data.get("department_id") or contact.department_id
        if (hotel_id, department_id) != (contact.hotel_id, contact.department_id):
            await self._check_attribution(scope, hotel_id, department_id)
        for key, value in data.items():
            setattr(contact, key, value)
        return await self.contact_repo.update(contact)

    async def delete_contact(
        self, scope: Scope, contact_id: int, deleted_by: int | None = None
    ) -> Any:
        contact = await self.get_contact(scope, contact_id)
        return await self.contact_repo.soft_delete(contact, deleted_by=deleted_by)

    async def _check_attribution(
        self, scope: Scope, hotel_id: int, department_id: int
    ) -> None:
        # Scope first: an out-of-scope id is refused without revealing whether it exists.
        self.validator.require_attribution(hotel_id, department_id, scope)
        if not await self.hotel_repo.live_ids([hotel_id]):
            raise ValidationException(f"Unknown hotel id: {hotel_id}", field="hotel_id")
        if not await self.department_repo.live_ids([department_id]):
            raise ValidationException(
                f"Unknown department id: {department_id}", field="department_id"
            )
