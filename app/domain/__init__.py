"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import ADMIN_ROLE_NAMES, PermissionKey, is_admin_role
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    DirectoryException,
    DuplicateAssignmentException,
    InfrastructureException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects import (
    UNRESTRICTED,
    HotelDepartmentPair,
    Restricted,
    Scope,
    Unrestricted,
)

__all__ = [
    # Enums
    "ADMIN_ROLE_NAMES",
    "PermissionKey",
    "is_admin_role",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "DirectoryException",
    "DuplicateAssignmentException",
    "InfrastructureException",
    "ResourceNotFoundException",
    "ValidationException",
    # Value objects
    "UNRESTRICTED",
    "HotelDepartmentPair",
    "Restricted",
    "Scope",
    "Unrestricted",
]
