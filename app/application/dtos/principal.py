"""DTO for the authenticated actor of a request."""

from dataclasses import dataclass, field

from app.domain.enums import is_admin_role, normalize_permission_key


@dataclass(frozen=True)
class Principal:
    """Authenticated actor: id, role names and the union of its roles' permission keys.

    Built per request by the principal resolver; never cached across requests.
    """

    user_id: int
    username: str
    roles: frozenset[str] = field(default_factory=frozenset)
    permissions: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_admin(self) -> bool:
        """Admin bypass: any role named ADMIN or ADMIN_MASTER (case-insensitive)."""
        return any(is_admin_role(r) for r in self.roles)

    def holds(self, key: str) -> bool:
        """Return True if the principal's permission set contains key."""
        return normalize_permission_key(key) in self.permissions
