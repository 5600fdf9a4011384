"""DTOs for role use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RoleResult:
    """Role read-model (result of get, list, create)."""

    id: int
    name: str
    description: str | None
    users_count: int = 0
