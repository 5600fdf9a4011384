"""Shared enumerations for the hotel directory.

Cross-cutting enums used by application and infrastructure (audit action
names and entity types). Domain-specific enums (e.g. PermissionKey) live in
app.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class AuditEntityType(_ValuesMixin, str, Enum):
    """Entity type recorded on audit entries."""

    HOTEL = "HOTEL"
    DEPARTMENT = "DEPARTMENT"
    HOTEL_DEPARTMENT = "HOTEL_DEPARTMENT"
    CONTACT = "CONTACT"
    CARD = "CARD"
    PERMISSION = "PERMISSION"
    ROLE = "ROLE"
    ROLE_PERMISSION = "ROLE_PERMISSION"
    USER = "USER"
    USER_ROLE = "USER_ROLE"
    USER_SCOPE = "USER_SCOPE"


class AuditAction(_ValuesMixin, str, Enum):
    """Audited action names (one per mutating operation)."""

    HOTEL_CREATE = "HOTEL_CREATE"
    HOTEL_EDIT = "HOTEL_EDIT"
    HOTEL_DELETE = "HOTEL_DELETE"
    DEPARTMENT_CREATE = "DEPARTMENT_CREATE"
    DEPARTMENT_EDIT = "DEPARTMENT_EDIT"
    DEPARTMENT_DELETE = "DEPARTMENT_DELETE"
    CONTACT_CREATE = "CONTACT_CREATE"
    CONTACT_EDIT = "CONTACT_EDIT"
    CONTACT_DELETE = "CONTACT_DELETE"
    CARD_CREATE = "CARD_CREATE"
    CARD_EDIT = "CARD_EDIT"
    CARD_DELETE = "CARD_DELETE"
    PERMISSION_CREATE = "PERMISSION_CREATE"
    PERMISSION_DELETE = "PERMISSION_DELETE"
    ROLE_CREATE = "ROLE_CREATE"
    ROLE_EDIT = "ROLE_EDIT"
    ROLE_DELETE = "ROLE_DELETE"
    ROLE_PERMISSIONS_BULK_UPDATE = "ROLE_PERMISSIONS_BULK_UPDATE"
    ROLE_PERMISSION_ASSIGN = "ROLE_PERMISSION_ASSIGN"
    ROLE_PERMISSION_REMOVE = "ROLE_PERMISSION_REMOVE"
    USER_ROLE_ASSIGN = "USER_ROLE_ASSIGN"
    USER_ROLE_REMOVE = "USER_ROLE_REMOVE"
    USER_SCOPE_UPDATE = "USER_SCOPE_UPDATE"
    USER_DELETE = "USER_DELETE"
    TOGGLE_ACTIVE = "TOGGLE_ACTIVE"
