"""Contact and Card ORM models. Cards inherit scope from their contact."""

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    IntIdMixin,
    SoftDeleteMixin,
    TimestampMixin,
)


class Contact(IntIdMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Contact. Table: contact. Belongs to exactly one hotel and one department."""

    __tablename__ = "contact"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    position: Mapped[str | None] = mapped_column(String(150), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    extension: Mapped[str | None] = mapped_column(String(20), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    hotel_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("hotel.id", ondelete="RESTRICT"), nullable=False
    )
    department_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("department.id", ondelete="RESTRICT"), nullable=False
    )

    __table_args__ = (Index("ix_contact_scope", "hotel_id", "department_id"),)


class Card(IntIdMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Card. Table: card. Belongs to exactly one contact."""

    __tablename__ = "card"

    contact_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("contact.id", ondelete="CASCADE"), nullable=False, index=True
    )
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
