"""Service interfaces (ports) for the application layer.

Protocols for authentication and audit persistence. Implementations live in
app.infrastructure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.audit_log import AuditLogEntryCreate
    from app.application.dtos.principal import Principal


class IIdentityProvider(Protocol):
    """Protocol for turning a bearer credential into an actor id."""

    def authenticate(self, credential: str) -> int:
        """Return the actor id; raise AuthenticationException when invalid."""


class IPrincipalResolver(Protocol):
    """Protocol for loading an active user's roles and permission keys."""

    async def resolve(self, user_id: int) -> Principal | None:
        """Return the principal, or None when the user is missing, inactive or deleted."""


class IAuditSink(Protocol):
    """Protocol for handing a finished audit entry to persistence without awaiting it."""

    def submit(self, entry: AuditLogEntryCreate) -> None:
        """Enqueue the entry; must not block and must not raise for persistence failures."""
