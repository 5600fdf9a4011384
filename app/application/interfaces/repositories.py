"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain values only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.audit_log import (
        AuditLogEntryCreate,
        AuditLogPage,
        AuditLogResult,
    )
    from app.domain.value_objects.predicate import Predicate
    from app.domain.value_objects.scope import HotelDepartmentPair


class IScopeDirectory(Protocol):
    """Protocol for the per-user scope assignment store (user_hotels, user_departments, pairs)."""

    async def get_hotel_ids(self, user_id: int) -> set[int]:
        """Return hotel ids assigned to the user (deleted hotels excluded)."""

    async def get_department_ids(self, user_id: int) -> set[int]:
        """Return department ids assigned to the user (deleted departments excluded)."""

    async def get_hotel_department_pairs(self, user_id: int) -> set[HotelDepartmentPair]:
        """Return exact (hotel, department) pairs assigned to the user."""

    async def replace_scope(
        self,
        user_id: int,
        hotel_ids: set[int],
        department_ids: set[int],
        pairs: set[HotelDepartmentPair],
    ) -> None:
        """Replace all three assignment sets inside the caller's transaction."""


class IRolePermissionDirectory(Protocol):
    """Protocol for role → permission assignments."""

    async def get_permission_ids_for_role(self, role_id: int) -> set[int]:
        """Return ids of permissions assigned to the role."""

    async def set_role_permissions(self, role_id: int, permission_ids: set[int]) -> None:
        """Replace the role's permission set inside the caller's transaction."""

    async def assign_permission_to_role(self, role_id: int, permission_id: int) -> None:
        """Assign one permission; raises DuplicateAssignmentException if present."""

    async def remove_permission_from_role(self, role_id: int, permission_id: int) -> bool:
        """Remove one assignment; return False if it did not exist."""


class IContactScopeLookup(Protocol):
    """Protocol for checking contact visibility under a compiled scope predicate."""

    async def contact_matches(self, contact_id: int, predicate: Predicate) -> bool:
        """Return True if a non-deleted contact with this id satisfies predicate."""

    async def card_matches(self, card_id: int, predicate: Predicate) -> bool:
        """Return True if a non-deleted card whose non-deleted contact satisfies predicate exists."""


class IAuditLogRepository(Protocol):
    """Protocol for the append-only audit log store."""

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one entry."""

    async def list_page(self, page: int, limit: int, q: str | None = None) -> AuditLogPage:
        """Return one page ordered by timestamp descending, optionally filtered by q."""
