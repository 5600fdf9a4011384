"""Background audit writer (implements IAuditSink).

Entries are queued in-process and written by a single worker task, each in
its own session and transaction, so audit persistence never shares the
request's transaction and never adds latency to the response. Write
failures are logged and dropped.
"""

from __future__ import annotations

import asyncio
import contextlib

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.audit_log import AuditLogEntryCreate
from app.infrastructure.persistence.repositories.audit_log_repo import AuditLogRepository
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class AuditDispatcher:
    """Bounded queue plus one worker task; owned by the application lifespan."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_size: int = 10_000,
    ) -> None:
        self._session_factory = session_factory
        self._queue: asyncio.Queue[AuditLogEntryCreate] = asyncio.Queue(maxsize=max_size)
        self._worker: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def submit(self, entry: AuditLogEntryCreate) -> None:
        """Enqueue without waiting. A full queue drops the entry with an error log."""
        try:
            self._queue.put_nowait(entry)
        except asyncio.QueueFull:
            logger.error(
                "Audit queue full; dropped %s entry for %s %s",
                entry.action_name,
                entry.entity_type,
                entry.entity_id,
            )

    def start(self) -> None:
        """Start the worker task (idempotent)."""
        if self.running:
            return
        self._worker = asyncio.create_task(self._run(), name="audit-dispatcher")
        logger.info("Audit dispatcher started")

    async def drain(self) -> None:
        """Wait until every queued entry has been written or dropped."""
        await self._queue.join()

    async def stop(self, timeout: float = 10.0) -> None:
        """Flush pending entries (bounded by timeout) then cancel the worker."""
        if self._worker is None:
            return
        try:
            await asyncio.wait_for(self._queue.join(), timeout=timeout)
        except TimeoutError:
            logger.warning(
                "Audit dispatcher stopped with %d unwritten entries", self._queue.qsize()
            )
        self._worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._worker
        self._worker = None
        logger.info("Audit dispatcher stopped")

    async def _run(self) -> None:
        while True:
            entry = await self._queue.get()
            try:
                await self._write(entry)
            except Exception:
                logger.exception(
                    "Failed to write audit entry %s for %s %s",
                    entry.action_name,
                    entry.entity_type,
                    entry.entity_id,
                )
            finally:
                self._queue.task_done()

    async def _write(self, entry: AuditLogEntryCreate) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                await AuditLogRepository(session).create(entry)
