"""Health check endpoints: liveness (no dependencies) and readiness (database reachable)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.domain.exceptions import InfrastructureException
from app.infrastructure.persistence.database import get_db
from app.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable"}},
)
async def readiness_check(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReadinessResponse:
    """Return 200 when the database answers; 503 otherwise."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise InfrastructureException(operation="readiness check") from e
    dispatcher = getattr(request.app.state, "audit_dispatcher", None)
    return ReadinessResponse(
        audit_queue_pending=dispatcher.pending if dispatcher is not None else 0
    )
