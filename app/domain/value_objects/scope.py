"""Scope: the hotels and departments an actor may see or modify.

A scope is computed per request from the actor's assignment rows and passed
explicitly down the call chain. It is either ``Unrestricted`` (admin bypass)
or ``Restricted`` with three independent sets. An empty ``Restricted`` scope
denies everything; it is never the same as ``Unrestricted``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, order=True)
class HotelDepartmentPair:
    """An exact (hotel, department) assignment."""

    hotel_id: int
    department_id: int

    def to_dict(self) -> dict[str, int]:
        return {"hotelId": self.hotel_id, "departmentId": self.department_id}


@dataclass(frozen=True)
class Unrestricted:
    """Admin scope: no organizational restriction."""

    def to_dict(self) -> dict[str, Any]:
        return {"unrestricted": True}


@dataclass(frozen=True)
class Restricted:
    """Non-admin scope built from user_hotels, user_departments and user_hotel_departments.

    Sets are normalized to frozensets so callers may pass any iterable.
    """

    hotel_ids: frozenset[int] = field(default_factory=frozenset)
    department_ids: frozenset[int] = field(default_factory=frozenset)
    hotel_dept_pairs: frozenset[HotelDepartmentPair] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "hotel_ids", frozenset(int(h) for h in self.hotel_ids))
        object.__setattr__(
            self, "department_ids", frozenset(int(d) for d in self.department_ids)
        )
        object.__setattr__(self, "hotel_dept_pairs", frozenset(self.hotel_dept_pairs))

    @property
    def is_empty(self) -> bool:
        """True when neither hotel ids nor department ids are assigned (closed-world deny)."""
        return not self.hotel_ids and not self.department_ids

    def to_dict(self) -> dict[str, Any]:
        """Exchange shape with sorted lists (stable for clients and tests)."""
        return {
            "hotelIds": sorted(self.hotel_ids),
            "departmentIds": sorted(self.department_ids),
            "hotelDeptPairs": [p.to_dict() for p in sorted(self.hotel_dept_pairs)],
        }


type Scope = Unrestricted | Restricted

UNRESTRICTED = Unrestricted()


def make_restricted(
    hotel_ids: Iterable[int] = (),
    department_ids: Iterable[int] = (),
    pairs: Iterable[tuple[int, int] | HotelDepartmentPair] = (),
) -> Restricted:
    """Build a Restricted scope from plain ids and (hotel_id, department_id) tuples."""
    normalized = frozenset(
        p if isinstance(p, HotelDepartmentPair) else HotelDepartmentPair(int(p[0]), int(p[1]))
        for p in pairs
    )
    return Restricted(
        hotel_ids=frozenset(hotel_ids),
        department_ids=frozenset(department_ids),
        hotel_dept_pairs=normalized,
    )


def scope_from_dict(data: Mapping[str, Any]) -> Unrestricted | Restricted:
    """Parse the exchange shape produced by ``to_dict``."""
    if data.get("unrestricted"):
        return UNRESTRICTED
    return make_restricted(
        hotel_ids=data.get("hotelIds") or (),
        department_ids=data.get("departmentIds") or (),
        pairs=(
            (p["hotelId"], p["departmentId"]) for p in data.get("hotelDeptPairs") or ()
        ),
    )
