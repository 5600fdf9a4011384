"""DTOs for permission use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionResult:
    """Permission read-model (result of get, list, create)."""

    id: int
    perm_key: str
    module_name: str
    action_name: str
