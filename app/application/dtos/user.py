"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get, list). No credentials."""

    id: int
    username: str
    email: str | None
    full_name: str | None
    is_active: bool
    roles: list[str] = field(default_factory=list)
