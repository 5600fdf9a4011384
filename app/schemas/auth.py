"""Authenticated-actor API schemas."""

from typing import Any

from pydantic import BaseModel, Field


class MeResponse(BaseModel):
    """Response for GET /auth/me: the resolved principal and its effective scope."""

    id: int
    username: str
    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)
    is_admin: bool = False
    scope: dict[str, Any]
