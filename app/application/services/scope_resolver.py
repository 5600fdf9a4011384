"""Scope resolver: actor → effective Scope (IScopeDirectory)."""

from __future__ import annotations

from app.application.interfaces.repositories import IScopeDirectory
from app.domain.value_objects.scope import UNRESTRICTED, Restricted, Scope


class ScopeResolver:
    """Compute the actor's visibility window fresh for every request.

    Admins get ``Unrestricted``; everyone else gets ``Restricted`` built from
    their assignment rows, where each set may be empty. Storage errors from the
    directory propagate unchanged (InfrastructureException), so a partial scope
    is never returned.
    """

    def __init__(self, directory: IScopeDirectory) -> None:
        self.directory = directory

    async def resolve(self, user_id: int, *, is_admin: bool) -> Scope:
        """Return the actor's scope. Read-only."""
        if is_admin:
            return UNRESTRICTED
        hotel_ids = await self.directory.get_hotel_ids(user_id)
        department_ids = await self.directory.get_department_ids(user_id)
        pairs = await self.directory.get_hotel_department_pairs(user_id)
        return Restricted(
            hotel_ids=frozenset(hotel_ids),
            department_ids=frozenset(department_ids),
            hotel_dept_pairs=frozenset(pairs),
        )
