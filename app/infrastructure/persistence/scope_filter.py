"""Storage adapter: translate scope predicates into SQLAlchemy clauses.

Field names in a predicate are resolved as attributes of the target model
(or alias), so the same predicate compiled for contacts can be applied to a
card query joined to its contact.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import and_, false, true
from sqlalchemy.sql.elements import ColumnElement

from app.domain.value_objects.predicate import (
    AllOf,
    AlwaysFalse,
    AlwaysTrue,
    MemberOf,
    Predicate,
)


def to_sqlalchemy(predicate: Predicate, model: Any) -> ColumnElement[bool]:
    """Return a boolean clause for predicate against model's columns.

    Raises:
        AttributeError: If a predicate field is not a column of model.
        TypeError: For an unknown predicate type.
    """
    if isinstance(predicate, AlwaysTrue):
        return true()
    if isinstance(predicate, AlwaysFalse):
        return false()
    if isinstance(predicate, MemberOf):
        column = getattr(model, predicate.field)
        return column.in_(predicate.values)
    if isinstance(predicate, AllOf):
        return and_(*(to_sqlalchemy(clause, model) for clause in predicate.clauses))
    raise TypeError(f"Unsupported predicate: {type(predicate).__name__}")
