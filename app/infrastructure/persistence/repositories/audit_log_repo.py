"""Audit log repository. Append-only; implements IAuditLogRepository."""

from __future__ import annotations

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.audit_log import (
    AuditLogEntryCreate,
    AuditLogPage,
    AuditLogResult,
)
from app.infrastructure.persistence.models.audit_log import AuditLog
from app.infrastructure.persistence.models.user import User
from app.shared.utils.datetime import ensure_utc


def _orm_to_result(row: AuditLog, username: str | None = None) -> AuditLogResult:
    """Map ORM to application DTO."""
    return AuditLogResult(
        id=row.id,
        user_id=row.user_id,
        username=username,
        action_name=row.action_name,
        entity_type=row.entity_type,
        entity_id=row.entity_id,
        success=row.success,
        error_message=row.error_message,
        ip_address=row.ip_address,
        mac_address=row.mac_address,
        device_name=row.device_name,
        old_values=row.old_values,
        new_values=row.new_values,
        timestamp=ensure_utc(row.timestamp),
    )


class AuditLogRepository:
    """Append-only audit log repository. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one audit log entry; return created record."""
        row = AuditLog(
            user_id=entry.user_id,
            action_name=entry.action_name,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            success=entry.success,
            error_message=entry.error_message,
            ip_address=entry.ip_address,
            mac_address=entry.mac_address,
            device_name=entry.device_name,
            old_values=entry.old_values,
            new_values=entry.new_values,
            timestamp=entry.timestamp,
        )
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return _orm_to_result(row)

    async def list_page(self, page: int, limit: int, q: str | None = None) -> AuditLogPage:
        """Return one page, newest first.

        q matches (case-insensitive substring) username, action name, entity
        type, entity id, IP address, device name and error message.
        """
        stmt = select(AuditLog, User.username).outerjoin(User, User.id == AuditLog.user_id)
        if q and q.strip():
            like = f"%{q.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(User.username).like(like),
                    func.lower(AuditLog.action_name).like(like),
                    func.lower(AuditLog.entity_type).like(like),
                    func.lower(cast(AuditLog.entity_id, String)).like(like),
                    func.lower(AuditLog.ip_address).like(like),
                    func.lower(AuditLog.device_name).like(like),
                    func.lower(AuditLog.error_message).like(like),
                )
            )
        total = await self.db.execute(select(func.count()).select_from(stmt.subquery()))
        result = await self.db.execute(
            stmt.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return AuditLogPage(
            items=[_orm_to_result(row, username) for row, username in result.all()],
            total=int(total.scalar_one()),
            page=page,
            limit=limit,
        )
