"""Contact repository. Implements IContactScopeLookup for cross-entity validation."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.value_objects.predicate import Predicate
from app.infrastructure.persistence.models.contact import Card, Contact
from app.infrastructure.persistence.repositories.base import SoftDeleteRepository
from app.infrastructure.persistence.scope_filter import to_sqlalchemy


class ContactRepository(SoftDeleteRepository[Contact]):
    """Contacts. Scoped reads take a predicate compiled for CONTACT_FIELDS."""

    resource_name = "contact"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Contact)

    async def list_scoped(
        self,
        predicate: Predicate,
        *,
        q: str | None = None,
        hotel_id: int | None = None,
        department_id: int | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[list[Contact], int]:
        """Return (page, total) of live contacts visible under predicate."""
        stmt = self._live().where(to_sqlalchemy(predicate, Contact))
        if hotel_id is not None:
            stmt = stmt.where(Contact.hotel_id == hotel_id)
        if department_id is not None:
            stmt = stmt.where(Contact.department_id == department_id)
        if q:
            like = f"%{q.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(Contact.name).like(like),
                    func.lower(Contact.position).like(like),
                    func.lower(Contact.email).like(like),
                    func.lower(Contact.phone).like(like),
                    func.lower(Contact.extension).like(like),
                )
            )
        total = await self.db.execute(
            select(func.count()).select_from(stmt.subquery())
        )
        result = await self.db.execute(
            stmt.order_by(Contact.name, Contact.id).offset(skip).limit(limit)
        )
        return list(result.scalars().all()), int(total.scalar_one())

    async def get_scoped(self, contact_id: int, predicate: Predicate) -> Contact | None:
        result = await self.db.execute(
            self._live().where(Contact.id == contact_id, to_sqlalchemy(predicate, Contact))
        )
        return result.scalar_one_or_none()

    async def create_contact(self, **fields: Any) -> Contact:
        return await self.create(Contact(**fields))

    async def contact_matches(self, contact_id: int, predicate: Predicate) -> bool:
        return await self.get_scoped(contact_id, predicate) is not None

    async def card_matches(self, card_id: int, predicate: Predicate) -> bool:
        result = await self.db.execute(
            select(Card.id)
            .join(Contact, Contact.id == Card.contact_id)
            .where(
                Card.id == card_id,
                Card.deleted_at.is_(None),
                Contact.deleted_at.is_(None),
                to_sqlalchemy(predicate, Contact),
            )
        )
        return result.scalar_one_or_none() is not None
