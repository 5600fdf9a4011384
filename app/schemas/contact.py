"""Contact and card API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ContactCreate(BaseModel):
    """Request body for creating a contact."""

    name: str = Field(..., min_length=1, max_length=150)
    position: str | None = Field(default=None, max_length=150)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    extension: str | None = Field(default=None, max_length=20)
    notes: str | None = None
    hotel_id: int = Field(..., gt=0)
    department_id: int = Field(..., gt=0)


class ContactUpdate(BaseModel):
    """Request body for updating a contact (partial; only sent fields change)."""

    name: str | None = Field(default=None, min_length=1, max_length=150)
    position: str | None = Field(default=None, max_length=150)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    extension: str | None = Field(default=None, max_length=20)
    notes: str | None = None
    hotel_id: int | None = Field(default=None, gt=0)
    department_id: int | None = Field(default=None, gt=0)


class ContactResponse(BaseModel):
    """Contact list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    position: str | None
    email: str | None
    phone: str | None
    extension: str | None
    notes: str | None
    hotel_id: int
    department_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ContactListResponse(BaseModel):
    """Paginated contact search result."""

    items: list[ContactResponse]
    total: int
    skip: int
    limit: int


class CardCreate(BaseModel):
    """Request body for creating a card."""

    contact_id: int = Field(..., gt=0)
    label: str = Field(..., min_length=1, max_length=100)
    value: str = Field(..., min_length=1, max_length=255)
    notes: str | None = None


class CardUpdate(BaseModel):
    """Request body for updating a card (partial). contact_id moves the card."""

    contact_id: int | None = Field(default=None, gt=0)
    label: str | None = Field(default=None, min_length=1, max_length=100)
    value: str | None = Field(default=None, min_length=1, max_length=255)
    notes: str | None = None


class CardResponse(BaseModel):
    """Card list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    contact_id: int
    label: str
    value: str
    notes: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None
