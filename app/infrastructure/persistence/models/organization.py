"""Hotel, Department and HotelDepartment link ORM models."""

from sqlalchemy import ForeignKey, Index, Integer, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    ActiveFlagMixin,
    IntIdMixin,
    SoftDeleteMixin,
    TimestampMixin,
)


class Hotel(IntIdMixin, TimestampMixin, SoftDeleteMixin, ActiveFlagMixin, Base):
    """Hotel. Table: hotel. (name, location) unique among non-deleted hotels."""

    __tablename__ = "hotel"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        Index(
            "uq_hotel_name_location_live",
            "name",
            "location",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )


class Department(IntIdMixin, TimestampMixin, SoftDeleteMixin, ActiveFlagMixin, Base):
    """Department. Table: department. Name unique among non-deleted departments."""

    __tablename__ = "department"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index(
            "uq_department_name_live",
            "name",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )


class HotelDepartment(IntIdMixin, Base):
    """Which departments exist within which hotel. Table: hotel_department."""

    __tablename__ = "hotel_department"

    hotel_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("hotel.id", ondelete="CASCADE"), nullable=False
    )
    department_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("department.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("hotel_id", "department_id", name="uq_hotel_department"),
    )
