"""Base repositories: generic CRUD plus the soft-delete / active-toggle lifecycle."""

from datetime import date, datetime
from typing import Any

from sqlalchemy import Select, inspect as sa_inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.database import Base
from app.shared.utils.datetime import utc_now


def serialize_row(obj: Any, exclude: frozenset[str] = frozenset()) -> dict[str, Any]:
    """Return a JSON-safe dict of obj's column values (datetimes as ISO strings)."""
    data: dict[str, Any] = {}
    for column in sa_inspect(obj).mapper.column_attrs:
        if column.key in exclude:
            continue
        value = getattr(obj, column.key)
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        data[column.key] = value
    return data


class BaseRepository[ModelType: Base]:
    """Base repository with get_by_id, create, update, delete and hooks.

    Subclasses override _on_after_create, _on_after_update, _on_before_delete
    when they need side effects. LSP: subclasses are substitutable for BaseRepository.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and run _on_after_create hook."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        await self._on_after_create(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush changes on an attached record and run _on_after_update hook."""
        await self.db.flush()
        await self.db.refresh(obj)
        await self._on_after_update(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Run _on_before_delete hook then hard-delete the record."""
        await self._on_before_delete(obj)
        await self.db.delete(obj)
        await self.db.flush()

    def audit_values(self, obj: ModelType) -> dict[str, Any]:
        """Snapshot used as old/new values on audit entries."""
        return serialize_row(obj)

    async def _on_after_create(self, obj: ModelType) -> None:
        """Override in subclasses to emit side effects."""

    async def _on_after_update(self, obj: ModelType) -> None:
        """Override in subclasses to emit side effects."""

    async def _on_before_delete(self, obj: ModelType) -> None:
        """Override in subclasses to emit side effects."""


class SoftDeleteRepository[ModelType: Base](BaseRepository[ModelType]):
    """Repository for models with SoftDeleteMixin.

    Every read goes through _live(), so deleted rows are invisible
    everywhere; deletion is terminal.
    """

    resource_name: str = "resource"

    def _live(self) -> Select[Any]:
        """SELECT of non-deleted rows."""
        model: Any = self.model
        return select(self.model).where(model.deleted_at.is_(None))

    async def get_live(self, entity_id: int) -> ModelType | None:
        """Return the non-deleted record with this id, or None."""
        model: Any = self.model
        result = await self.db.execute(self._live().where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def require_live(self, entity_id: int) -> ModelType:
        """Return the non-deleted record or raise ResourceNotFoundException."""
        obj = await self.get_live(entity_id)
        if obj is None:
            raise ResourceNotFoundException(self.resource_name, entity_id)
        return obj

    async def snapshot(self, entity_id: int) -> dict[str, Any] | None:
        """Audit pre-state of a live record (None if missing)."""
        obj = await self.get_live(entity_id)
        return self.audit_values(obj) if obj is not None else None

    async def soft_delete(self, obj: ModelType, deleted_by: int | None = None) -> ModelType:
        """Mark obj deleted (terminal)."""
        target: Any = obj
        target.deleted_at = utc_now()
        target.deleted_by = deleted_by
        return await self.update(obj)

    async def toggle_active(self, obj: ModelType) -> ModelType:
        """Flip is_active on a live record (ActiveFlagMixin models only)."""
        target: Any = obj
        target.is_active = not target.is_active
        return await self.update(obj)
