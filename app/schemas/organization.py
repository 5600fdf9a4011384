"""Hotel, department and hotel-department link API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class HotelCreate(BaseModel):
    """Request body for creating a hotel."""

    name: str = Field(..., min_length=1, max_length=150)
    location: str | None = Field(default=None, max_length=255)


class HotelUpdate(BaseModel):
    """Request body for updating a hotel (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=150)
    location: str | None = Field(default=None, max_length=255)


class HotelResponse(BaseModel):
    """Hotel list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    location: str | None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DepartmentCreate(BaseModel):
    """Request body for creating a department."""

    name: str = Field(..., min_length=1, max_length=150)
    description: str | None = None


class DepartmentUpdate(BaseModel):
    """Request body for updating a department (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=150)
    description: str | None = None


class DepartmentResponse(BaseModel):
    """Department list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class HotelDepartmentsSync(BaseModel):
    """Request body for PUT /hotels/{id}/departments (full replacement)."""

    department_ids: list[int] = Field(default_factory=list, max_length=1000)


class HotelDepartmentLink(BaseModel):
    """One (hotel, department) link."""

    hotel_id: int
    department_id: int
