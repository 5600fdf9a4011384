"""Role API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class RoleCreateRequest(BaseModel):
    """Request body for creating a role."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    permission_ids: list[int] = Field(default_factory=list, max_length=500)


class RoleUpdate(BaseModel):
    """Request body for updating a role (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)


class RolePermissionAssign(BaseModel):
    """Request body for assigning a permission to a role."""

    permission_id: int = Field(..., gt=0)


class RolePermissionsReplace(BaseModel):
    """Request body for PUT /roles/{id}/permissions (full replacement; empty clears)."""

    permission_ids: list[int] = Field(default_factory=list, max_length=500)


class RoleResponse(BaseModel):
    """Role list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    users_count: int = 0


class RolePermissionAssignedResponse(BaseModel):
    """Response for POST /{role_id}/permissions (assignment created)."""

    role_id: int
    permission_id: int
