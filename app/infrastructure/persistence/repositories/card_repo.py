"""Card repository. Scope is derived through the owning contact."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.value_objects.predicate import Predicate
from app.infrastructure.persistence.models.contact import Card, Contact
from app.infrastructure.persistence.repositories.base import SoftDeleteRepository
from app.infrastructure.persistence.scope_filter import to_sqlalchemy


class CardRepository(SoftDeleteRepository[Card]):
    """Cards. Scoped reads take a predicate compiled for CARD_FIELDS (contact columns)."""

    resource_name = "card"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Card)

    def _scoped(self, predicate: Predicate) -> Select[Any]:
        return (
            self._live()
            .join(Contact, Contact.id == Card.contact_id)
            .where(Contact.deleted_at.is_(None), to_sqlalchemy(predicate, Contact))
        )

    async def list_scoped(
        self,
        predicate: Predicate,
        *,
        contact_id: int | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Card]:
        stmt = self._scoped(predicate)
        if contact_id is not None:
            stmt = stmt.where(Card.contact_id == contact_id)
        result = await self.db.execute(
            stmt.order_by(Card.contact_id, Card.label, Card.id).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def create_card(
        self, contact_id: int, label: str, value: str, notes: str | None = None
    ) -> Card:
        return await self.create(
            Card(contact_id=contact_id, label=label, value=value, notes=notes)
        )

    async def get_scoped(self, card_id: int, predicate: Predicate) -> Card | None:
        result = await self.db.execute(self._scoped(predicate).where(Card.id == card_id))
        return result.scalar_one_or_none()
