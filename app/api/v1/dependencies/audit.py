"""Audit dependencies (composition root).

``audited(...)`` builds a yield dependency that wraps the handler in an
AuditRecorder. Declare it before any write-session dependency in the
endpoint signature: yield dependencies exit in reverse order, so the write
transaction has committed (or rolled back) before the entry is built.

Annotations here are evaluated eagerly: the gate dependency inside
``audited`` closes over its permission keys.
"""

from collections.abc import AsyncIterator, Awaitable, Callable
from functools import partial
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.audit_log import AuditLogEntryCreate
from app.application.dtos.principal import Principal
from app.application.interfaces.services import IAuditSink
from app.application.services.audit_recorder import (
    AuditRecorder,
    AuditTrail,
    OldStateAccessor,
)
from app.application.services.scope_filter_compiler import ScopeFields, compile_scope_filter
from app.core.exception_handlers import classify_audit_failure
from app.domain.value_objects.scope import Scope
from app.shared.enums import AuditAction, AuditEntityType
from app.shared.request_audit import get_request_origin
from app.shared.telemetry.logging import get_logger

from .auth import CurrentScope, require_permission
from .db import ReadSession

logger = get_logger(__name__)

# Loads the pre-state of one entity by id on the request's read session,
# as seen under the caller's scope.
type SnapshotLoader = Callable[[AsyncSession, int, Scope], Awaitable[Any]]


class _UnavailableAuditSink:
    """Used when no dispatcher is running (e.g. app built without lifespan)."""

    def submit(self, entry: AuditLogEntryCreate) -> None:
        logger.warning(
            "Audit dispatcher not running; dropped %s entry for %s %s",
            entry.action_name,
            entry.entity_type,
            entry.entity_id,
        )


def get_audit_sink(request: Request) -> IAuditSink:
    """Background audit dispatcher started in app lifespan (app.state.audit_dispatcher)."""
    dispatcher = getattr(request.app.state, "audit_dispatcher", None)
    return dispatcher if dispatcher is not None else _UnavailableAuditSink()


def get_audit_recorder(
    sink: Annotated[IAuditSink, Depends(get_audit_sink)],
) -> AuditRecorder:
    return AuditRecorder(sink, classify_failure=classify_audit_failure)


def snapshot_with(repo_cls: Callable[[AsyncSession], Any]) -> SnapshotLoader:
    """SnapshotLoader for unscoped entities: repo_cls(db).snapshot(entity_id)."""

    async def _load(db: AsyncSession, entity_id: int, scope: Scope) -> Any:
        return await repo_cls(db).snapshot(entity_id)

    return _load


def scoped_snapshot_with(
    repo_cls: Callable[[AsyncSession], Any], fields: ScopeFields
) -> SnapshotLoader:
    """SnapshotLoader that reads the pre-state through the caller's scope.

    A row hidden by scope yields None, so old values never carry data the
    caller cannot read.
    """

    async def _load(db: AsyncSession, entity_id: int, scope: Scope) -> Any:
        repo = repo_cls(db)
        obj = await repo.get_scoped(entity_id, compile_scope_filter(scope, fields))
        return repo.audit_values(obj) if obj is not None else None

    return _load


def audited(
    action: AuditAction,
    entity_type: AuditEntityType,
    *permission_keys: str,
    entity_param: str | None = None,
    snapshot: SnapshotLoader | None = None,
):
    """Dependency factory: gate on permission_keys, then record one audit entry.

    Args:
        action: Audited action name.
        entity_type: Audited entity type.
        permission_keys: Acceptable permission keys (any one suffices).
        entity_param: Path parameter holding the entity id, if any.
        snapshot: Loader for the entity's pre-state (old values).

    Yields the AuditTrail; the handler reports entity id, new values and
    status through trail.record_result().
    """

    async def _audited(
        request: Request,
        principal: Annotated[Principal, Depends(require_permission(*permission_keys))],
        scope: CurrentScope,
        recorder: Annotated[AuditRecorder, Depends(get_audit_recorder)],
        db: ReadSession,
    ) -> AsyncIterator[AuditTrail]:
        raw_id = request.path_params.get(entity_param) if entity_param else None
        capture_old: OldStateAccessor | None = None
        if snapshot is not None and raw_id is not None and str(raw_id).isdigit():
            capture_old = partial(snapshot, db, int(raw_id), scope)

        async with recorder.record(
            actor_id=principal.user_id,
            action_name=action.value,
            entity_type=entity_type.value,
            origin=get_request_origin(request),
            entity_id=raw_id,
            capture_old=capture_old,
        ) as trail:
            yield trail

    return _audited
