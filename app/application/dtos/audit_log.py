"""DTOs for the audit log (mutation trail)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuditLogEntryCreate:
    """Input for appending one audit log record. Append-only; no update."""

    user_id: int | None
    action_name: str
    entity_type: str
    entity_id: str | None
    success: bool
    error_message: str | None
    ip_address: str | None
    mac_address: str | None
    device_name: str | None
    old_values: Any
    new_values: Any
    timestamp: datetime


@dataclass(frozen=True)
class AuditLogResult:
    """Single audit log entry (read-model for list)."""

    id: int
    user_id: int | None
    username: str | None
    action_name: str
    entity_type: str
    entity_id: str | None
    success: bool
    error_message: str | None
    ip_address: str | None
    mac_address: str | None
    device_name: str | None
    old_values: Any
    new_values: Any
    timestamp: datetime


@dataclass(frozen=True)
class AuditLogPage:
    """One page of audit entries plus paging metadata."""

    items: list[AuditLogResult]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0


@dataclass(frozen=True)
class RequestOrigin:
    """Network origin and device descriptor of the request being audited."""

    ip_address: str | None = None
    mac_address: str | None = None
    device_name: str | None = None
