"""Scope filter compiler: Scope + entity field map → typed restriction predicate.

The compiler is storage-agnostic. ``app.infrastructure.persistence.scope_filter``
translates the predicate to SQLAlchemy clauses; ``Predicate.matches`` evaluates
it against a candidate row in memory.

Hotel ids and department ids are independent dimensions: a row passes when its
hotel is in ``hotel_ids`` (if any are assigned) AND its department is in
``department_ids`` (if any are assigned). Exact hotel-department pairs do not
take part in filtering.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.value_objects.predicate import (
    AllOf,
    AlwaysFalse,
    AlwaysTrue,
    MemberOf,
    Predicate,
)
from app.domain.value_objects.scope import Restricted, Scope, Unrestricted


@dataclass(frozen=True)
class ScopeFields:
    """How an entity type exposes its organizational attribution.

    A missing field means the entity has no attribution on that dimension.
    """

    hotel_field: str | None = None
    department_field: str | None = None


HOTEL_FIELDS = ScopeFields(hotel_field="id")
DEPARTMENT_FIELDS = ScopeFields(department_field="id")
CONTACT_FIELDS = ScopeFields(hotel_field="hotel_id", department_field="department_id")
# Cards are filtered through their contact's columns.
CARD_FIELDS = CONTACT_FIELDS
HOTEL_DEPARTMENT_LINK_FIELDS = ScopeFields(
    hotel_field="hotel_id", department_field="department_id"
)

_ALWAYS_TRUE = AlwaysTrue()
_ALWAYS_FALSE = AlwaysFalse()


def compile_scope_filter(scope: Scope, fields: ScopeFields) -> Predicate:
    """Compile scope into a predicate for an entity described by fields.

    - Unrestricted: always true.
    - Restricted with no hotel ids and no department ids: always false.
    - Otherwise: conjunction of the membership tests whose set is non-empty
      and whose field exists on the entity. If none applies, always false.
    """
    if isinstance(scope, Unrestricted):
        return _ALWAYS_TRUE
    if not isinstance(scope, Restricted):
        raise TypeError(f"Unsupported scope type: {type(scope).__name__}")
    if scope.is_empty:
        return _ALWAYS_FALSE

    clauses: list[Predicate] = []
    if scope.hotel_ids and fields.hotel_field:
        clauses.append(MemberOf(fields.hotel_field, tuple(sorted(scope.hotel_ids))))
    if scope.department_ids and fields.department_field:
        clauses.append(
            MemberOf(fields.department_field, tuple(sorted(scope.department_ids)))
        )

    if not clauses:
        return _ALWAYS_FALSE
    if len(clauses) == 1:
        return clauses[0]
    return AllOf(tuple(clauses))
