"""SQLAlchemy mixins for common model patterns (DRY).

Provides: IntIdMixin, TimestampMixin, SoftDeleteMixin, ActiveFlagMixin.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func


class IntIdMixin:
    """Mixin for models keyed by an autoincrement integer id."""

    @declared_attr
    def id(cls) -> Mapped[int]:
        return mapped_column(Integer, primary_key=True, autoincrement=True)


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class SoftDeleteMixin:
    """Mixin for soft delete (deleted_at, deleted_by). Null deleted_at means live.

    Deletion is terminal: repositories filter ``deleted_at IS NULL`` on every read.
    """

    @declared_attr
    def deleted_at(cls) -> Mapped[datetime | None]:
        return mapped_column(DateTime(timezone=True), nullable=True, index=True)

    @declared_attr
    def deleted_by(cls) -> Mapped[int | None]:
        return mapped_column(
            Integer, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
        )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class ActiveFlagMixin:
    """Mixin for the reversible active/inactive toggle."""

    @declared_attr
    def is_active(cls) -> Mapped[bool]:
        return mapped_column(
            Boolean, nullable=False, default=True, server_default=text("true")
        )
