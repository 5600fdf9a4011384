"""Permission API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class PermissionCreate(BaseModel):
    """Request body for creating a permission. Module/action default to the key's halves."""

    perm_key: str = Field(
        ..., min_length=3, max_length=100, pattern=r"^[A-Za-z0-9]+(_[A-Za-z0-9]+)+$"
    )
    module_name: str | None = Field(default=None, max_length=50)
    action_name: str | None = Field(default=None, max_length=50)


class PermissionResponse(BaseModel):
    """Permission list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    perm_key: str
    module_name: str
    action_name: str
