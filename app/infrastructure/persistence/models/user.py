"""User ORM model. Table: app_user (``user`` is reserved in PostgreSQL)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    ActiveFlagMixin,
    IntIdMixin,
    SoftDeleteMixin,
    TimestampMixin,
)


class User(IntIdMixin, TimestampMixin, SoftDeleteMixin, ActiveFlagMixin, Base):
    """Directory user. Only active, non-deleted users authenticate."""

    __tablename__ = "app_user"

    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
