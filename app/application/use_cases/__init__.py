"""Application use cases: one service per resource, scope passed explicitly."""

from app.application.use_cases.contacts import CardService, ContactService
from app.application.use_cases.organization import DepartmentService, HotelService

__all__ = [
    "CardService",
    "ContactService",
    "DepartmentService",
    "HotelService",
]
