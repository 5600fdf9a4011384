"""Audit recorder: wrap one mutation attempt and emit exactly one audit entry.

Usage::

    async with recorder.record(
        actor_id=principal.user_id,
        action_name="CONTACT_EDIT",
        entity_type="CONTACT",
        origin=origin,
        entity_id=contact_id,
        capture_old=lambda: contact_repo.snapshot(contact_id),
    ) as trail:
        updated = await service.update(...)
        trail.record_result(new_values=snapshot_of(updated))

The entry is built after the wrapped block finishes and handed to an
``IAuditSink``. The sink owns persistence; the recorder never awaits it.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from app.application.dtos.audit_log import AuditLogEntryCreate, RequestOrigin
from app.application.interfaces.services import IAuditSink
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

# Outcomes at or above this status are failures.
FAILURE_STATUS_THRESHOLD = 400


@dataclass(frozen=True)
class AuditFailure:
    """Outcome of a failed attempt: response status and the message to record."""

    status_code: int
    message: str


# Maps an exception to its outcome; None means "not a mutation attempt" (do not record).
type FailureClassifier = Callable[[Exception], AuditFailure | None]
type OldStateAccessor = Callable[[], Awaitable[Any]]


class AuditTrail:
    """Handle given to the wrapped operation to report what it did.

    Attributes:
        entity_id: Affected entity id; starts from the caller's hint, the
            operation may overwrite it (e.g. with the id of a created row).
        old_values: Pre-state captured before the operation ran (or None).
        new_values: Post-state reported by the operation.
        status_code: Response status the operation intends to return.
    """

    def __init__(self, entity_id: int | str | None, old_values: Any) -> None:
        self.entity_id = entity_id
        self.old_values = old_values
        self.new_values: Any = None
        self.status_code = 200

    def record_result(
        self,
        *,
        entity_id: int | str | None = None,
        new_values: Any = None,
        status_code: int | None = None,
    ) -> None:
        """Report the entity id, post-state and status of a completed operation."""
        if entity_id is not None:
            self.entity_id = entity_id
        if new_values is not None:
            self.new_values = new_values
        if status_code is not None:
            self.status_code = status_code


class AuditRecorder:
    """Pre-capture, execute, post-capture, hand off. Never fails the primary operation."""

    def __init__(self, sink: IAuditSink, classify_failure: FailureClassifier) -> None:
        self.sink = sink
        self.classify_failure = classify_failure

    @asynccontextmanager
    async def record(
        self,
        *,
        actor_id: int | None,
        action_name: str,
        entity_type: str,
        origin: RequestOrigin,
        entity_id: int | str | None = None,
        capture_old: OldStateAccessor | None = None,
    ) -> AsyncIterator[AuditTrail]:
        """Wrap one mutation attempt.

        Exceptions from the wrapped block are re-raised unchanged after the
        failure entry is emitted. Exceptions the classifier rejects (returns
        None for) are re-raised without an entry.
        """
        old_values = await self._capture_old(capture_old, action_name)
        trail = AuditTrail(entity_id=entity_id, old_values=old_values)
        try:
            yield trail
        except Exception as exc:
            failure = self.classify_failure(exc)
            if failure is None:
                raise
            self._emit(
                trail,
                actor_id=actor_id,
                action_name=action_name,
                entity_type=entity_type,
                origin=origin,
                status_code=failure.status_code,
                error_message=failure.message,
            )
            raise
        self._emit(
            trail,
            actor_id=actor_id,
            action_name=action_name,
            entity_type=entity_type,
            origin=origin,
            status_code=trail.status_code,
            error_message=None,
        )

    async def _capture_old(
        self, capture_old: OldStateAccessor | None, action_name: str
    ) -> Any:
        """Best-effort pre-state; None when absent or failing."""
        if capture_old is None:
            return None
        try:
            return await capture_old()
        except Exception:
            logger.warning(
                "Audit pre-capture failed for %s; recording without old values",
                action_name,
                exc_info=True,
            )
            return None

    def _emit(
        self,
        trail: AuditTrail,
        *,
        actor_id: int | None,
        action_name: str,
        entity_type: str,
        origin: RequestOrigin,
        status_code: int,
        error_message: str | None,
    ) -> None:
        success = status_code < FAILURE_STATUS_THRESHOLD
        entry = AuditLogEntryCreate(
            user_id=actor_id,
            action_name=action_name,
            entity_type=entity_type,
            entity_id=str(trail.entity_id) if trail.entity_id is not None else None,
            success=success,
            error_message=None if success else (error_message or f"HTTP {status_code}"),
            ip_address=origin.ip_address,
            mac_address=origin.mac_address,
            device_name=origin.device_name,
            old_values=trail.old_values,
            new_values=trail.new_values if success else None,
            timestamp=utc_now(),
        )
        try:
            self.sink.submit(entry)
        except Exception:
            logger.warning(
                "Audit entry for %s dropped: sink rejected it", action_name, exc_info=True
            )
