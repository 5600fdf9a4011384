"""Domain value objects and shared value types."""

from app.domain.value_objects.predicate import (
    AllOf,
    AlwaysFalse,
    AlwaysTrue,
    MemberOf,
    Predicate,
)
from app.domain.value_objects.scope import (
    UNRESTRICTED,
    HotelDepartmentPair,
    Restricted,
    Scope,
    Unrestricted,
    make_restricted,
    scope_from_dict,
)

__all__ = [
    "AllOf",
    "AlwaysFalse",
    "AlwaysTrue",
    "MemberOf",
    "Predicate",
    "UNRESTRICTED",
    "HotelDepartmentPair",
    "Restricted",
    "Scope",
    "Unrestricted",
    "make_restricted",
    "scope_from_dict",
]
