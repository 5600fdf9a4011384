"""Typed restriction predicates produced by the scope filter compiler.

Predicates are plain values: a storage adapter translates them into query
clauses, and ``matches`` evaluates them against an in-memory row (used to
check a candidate attribution before it is written).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AlwaysTrue:
    """No restriction."""

    def matches(self, row: Mapping[str, Any]) -> bool:
        return True


@dataclass(frozen=True)
class AlwaysFalse:
    """Matches nothing."""

    def matches(self, row: Mapping[str, Any]) -> bool:
        return False


@dataclass(frozen=True)
class MemberOf:
    """``field`` must be one of ``values`` (bound parameters, sorted)."""

    field: str
    values: tuple[int, ...]

    def matches(self, row: Mapping[str, Any]) -> bool:
        value = row.get(self.field)
        return value is not None and int(value) in self.values


@dataclass(frozen=True)
class AllOf:
    """Conjunction of clauses."""

    clauses: tuple[Predicate, ...]

    def matches(self, row: Mapping[str, Any]) -> bool:
        return all(clause.matches(row) for clause in self.clauses)


type Predicate = AlwaysTrue | AlwaysFalse | MemberOf | AllOf
