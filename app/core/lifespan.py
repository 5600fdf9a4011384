"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (logging, audit dispatcher, DB
engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.services.audit_dispatcher import AuditDispatcher
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, audit dispatcher. Shutdown: flush and stop the audit
    dispatcher (bounded by audit_shutdown_timeout_seconds), dispose engine.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    dispatcher = AuditDispatcher(
        get_session_factory(), max_size=settings.audit_queue_max_size
    )
    dispatcher.start()
    app.state.audit_dispatcher = dispatcher

    yield

    # ---- Shutdown ----
    await dispatcher.stop(timeout=settings.audit_shutdown_timeout_seconds)
    app.state.audit_dispatcher = None

    from app.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
