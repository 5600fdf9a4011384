"""Permission gate: allow/deny by permission key alternatives with admin bypass."""

from __future__ import annotations

from collections.abc import Iterable

from app.application.dtos.principal import Principal
from app.domain.enums import normalize_permission_key
from app.domain.exceptions import AuthorizationException


def is_allowed(
    acceptable: Iterable[str],
    permissions: Iterable[str],
    *,
    is_admin: bool,
) -> bool:
    """Return True if is_admin, or if any acceptable key is in permissions.

    Keys are compared upper-cased. An empty acceptable list admits admins only.
    """
    if is_admin:
        return True
    held = {normalize_permission_key(p) for p in permissions}
    return any(normalize_permission_key(k) in held for k in acceptable)


class PermissionGate:
    """Centralized permission checking against a resolved principal.

    The principal already carries the union of its roles' permission keys,
    so checks here are pure and never touch storage.
    """

    def allows(self, principal: Principal, *keys: str) -> bool:
        """Return True if the principal may perform an operation requiring any of keys."""
        return is_allowed(keys, principal.permissions, is_admin=principal.is_admin)

    def require(self, principal: Principal, *keys: str) -> Principal:
        """Return the principal or raise AuthorizationException (fail closed)."""
        if not self.allows(principal, *keys):
            raise AuthorizationException(permissions=keys)
        return principal
