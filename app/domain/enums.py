"""Domain enumerations for the hotel directory.

Enums represent fixed sets of domain values (permission keys, bypass roles).
"""

from enum import Enum

# Roles whose holders bypass permission checks and scope restriction.
ADMIN_ROLE_NAMES: frozenset[str] = frozenset({"ADMIN", "ADMIN_MASTER"})


def is_admin_role(name: str | None) -> bool:
    """Return True if the role name is a bypass role (case-insensitive)."""
    return bool(name) and name.strip().upper() in ADMIN_ROLE_NAMES


def normalize_permission_key(key: str) -> str:
    """Permission keys are compared and stored upper-cased."""
    return key.strip().upper()


def split_permission_key(key: str) -> tuple[str, str]:
    """Split ``MODULE_ACTION`` at the last underscore into (module, action).

    Raises:
        ValueError: If either part is empty.
    """
    module, _, action = normalize_permission_key(key).rpartition("_")
    if not module or not action:
        raise ValueError(f"Permission key must look like MODULE_ACTION: {key!r}")
    return module, action


class PermissionKey(str, Enum):
    """Permission keys seeded for the directory (``MODULE_ACTION``).

    Keys are data, not code: roles may reference keys created at runtime,
    this enum lists the ones endpoints check.
    """

    CONTACT_VIEW = "CONTACT_VIEW"
    CONTACT_CREATE = "CONTACT_CREATE"
    CONTACT_EDIT = "CONTACT_EDIT"
    CONTACT_DELETE = "CONTACT_DELETE"
    CARD_VIEW = "CARD_VIEW"
    CARD_CREATE = "CARD_CREATE"
    CARD_EDIT = "CARD_EDIT"
    CARD_DELETE = "CARD_DELETE"
    HOTEL_VIEW = "HOTEL_VIEW"
    HOTEL_CREATE = "HOTEL_CREATE"
    HOTEL_EDIT = "HOTEL_EDIT"
    HOTEL_DELETE = "HOTEL_DELETE"
    DEPARTMENT_VIEW = "DEPARTMENT_VIEW"
    DEPARTMENT_CREATE = "DEPARTMENT_CREATE"
    DEPARTMENT_EDIT = "DEPARTMENT_EDIT"
    DEPARTMENT_DELETE = "DEPARTMENT_DELETE"
    ROLE_MANAGE = "ROLE_MANAGE"
    USER_VIEW = "USER_VIEW"
    USER_CREATE = "USER_CREATE"
    USER_EDIT = "USER_EDIT"
    USER_DELETE = "USER_DELETE"
    AUDIT_VIEW = "AUDIT_VIEW"

    @property
    def module_name(self) -> str:
        """Module part of the key (e.g. CONTACT)."""
        return self.value.rsplit("_", 1)[0]

    @property
    def action_name(self) -> str:
        """Action part of the key (e.g. CREATE)."""
        return self.value.rsplit("_", 1)[1]

    @classmethod
    def values(cls) -> list[str]:
        """Return all key strings (e.g. for seeding)."""
        return [key.value for key in cls]
