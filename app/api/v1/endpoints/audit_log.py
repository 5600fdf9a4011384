"""Audit log API: search the mutation trail (who did what, when, from where)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import get_audit_log_repo, require_permission
from app.core.config import get_settings
from app.domain.enums import PermissionKey
from app.infrastructure.persistence.repositories.audit_log_repo import AuditLogRepository
from app.schemas.audit_log import AuditLogListResponse

router = APIRouter()


@router.get("", response_model=AuditLogListResponse)
async def list_audit_logs(
    audit_repo: Annotated[AuditLogRepository, Depends(get_audit_log_repo)],
    _: Annotated[object, Depends(require_permission(PermissionKey.AUDIT_VIEW))] = None,
    q: str | None = Query(None, max_length=200, description="Free-text search"),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, description="Page size"),
):
    """List audit entries newest first (paginated, optional search).

    limit above the configured maximum is clamped to it.
    """
    settings = get_settings()
    size = limit if limit is not None else settings.audit_page_size_default
    size = min(size, settings.audit_page_size_max)
    result = await audit_repo.list_page(page=page, limit=size, q=q)
    return AuditLogListResponse.from_page(result)
