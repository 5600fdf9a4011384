"""Request/response schemas for audit log API (camelCase exchange shape)."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.application.dtos.audit_log import AuditLogPage, AuditLogResult


class AuditLogEntryResponse(BaseModel):
    """Single audit log entry (read). success is exchanged as 0/1."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    user_id: int | None
    username: str | None = None
    action_name: str
    entity_type: str
    entity_id: str | None
    success: int
    error_message: str | None = None
    ip_address: str | None = None
    mac_address: str | None = None
    device_name: str | None = None
    old_values: Any = None
    new_values: Any = None
    timestamp: datetime

    @classmethod
    def from_result(cls, row: AuditLogResult) -> "AuditLogEntryResponse":
        return cls(
            id=row.id,
            user_id=row.user_id,
            username=row.username,
            action_name=row.action_name,
            entity_type=row.entity_type,
            entity_id=row.entity_id,
            success=1 if row.success else 0,
            error_message=row.error_message,
            ip_address=row.ip_address,
            mac_address=row.mac_address,
            device_name=row.device_name,
            old_values=row.old_values,
            new_values=row.new_values,
            timestamp=row.timestamp,
        )


class AuditLogListResponse(BaseModel):
    """One page of audit log entries, newest first."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[AuditLogEntryResponse]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_page(cls, page: AuditLogPage) -> "AuditLogListResponse":
        return cls(
            items=[AuditLogEntryResponse.from_result(r) for r in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )
