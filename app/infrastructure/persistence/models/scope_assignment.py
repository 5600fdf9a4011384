"""Per-user scope assignment ORM models (user_hotel, user_department, user_hotel_department)."""

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IntIdMixin


class UserHotel(IntIdMixin, Base):
    """Hotel assigned to a user. Table: user_hotel."""

    __tablename__ = "user_hotel"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    hotel_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("hotel.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (UniqueConstraint("user_id", "hotel_id", name="uq_user_hotel"),)


class UserDepartment(IntIdMixin, Base):
    """Department assigned to a user. Table: user_department."""

    __tablename__ = "user_department"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    department_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("department.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "department_id", name="uq_user_department"),
    )


class UserHotelDepartment(IntIdMixin, Base):
    """Exact (hotel, department) pair assigned to a user. Table: user_hotel_department."""

    __tablename__ = "user_hotel_department"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    hotel_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("hotel.id", ondelete="CASCADE"), nullable=False
    )
    department_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("department.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint(
            "user_id", "hotel_id", "department_id", name="uq_user_hotel_department"
        ),
    )
