"""Role ORM model. Roles named ADMIN / ADMIN_MASTER are bypass roles."""

from sqlalchemy import Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    IntIdMixin,
    SoftDeleteMixin,
    TimestampMixin,
)


class Role(IntIdMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Role. Table: role. Name unique among non-deleted roles."""

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index(
            "uq_role_name_live",
            "name",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
