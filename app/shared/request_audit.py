"""Shared helpers for audit logging: derive request metadata from Starlette Request."""

from __future__ import annotations

from starlette.requests import Request

from app.application.dtos.audit_log import RequestOrigin
from app.core.config import get_settings


def get_client_ip(request: Request) -> str | None:
    """X-Forwarded-For first hop, else the socket peer address."""
    client_host = request.client.host if request.client else None
    forwarded = request.headers.get("X-Forwarded-For")
    return (forwarded.split(",")[0].strip() if forwarded else None) or client_host


def get_request_origin(request: Request) -> RequestOrigin:
    """Return the network origin and device descriptor for audit entries.

    Single source of truth for deriving client identity from the request:
    IP from X-Forwarded-For (first hop) or request.client.host, device name
    from User-Agent, MAC address from the configured device header.
    """
    settings = get_settings()
    return RequestOrigin(
        ip_address=get_client_ip(request),
        mac_address=request.headers.get(settings.device_mac_header) or None,
        device_name=request.headers.get("User-Agent") or None,
    )
