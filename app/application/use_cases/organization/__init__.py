"""Organization use cases: hotels, departments and their links."""

from app.application.use_cases.organization.department_operations import (
    DepartmentService,
)
from app.application.use_cases.organization.hotel_operations import HotelService

__all__ = [
    "DepartmentService",
    "HotelService",
]
