"""Unit tests for the Scope value objects and their exchange shape."""

from app.domain.value_objects.scope import (
    UNRESTRICTED,
    HotelDepartmentPair,
    Restricted,
    Unrestricted,
    make_restricted,
    scope_from_dict,
)


def test_restricted_normalizes_iterables_to_frozensets() -> None:
    """Lists and sets passed to Restricted are stored as frozensets of ints."""
    scope = Restricted(hotel_ids=[3, 1, 3], department_ids={2})
    assert scope.hotel_ids == frozenset({1, 3})
    assert scope.department_ids == frozenset({2})
    assert scope.hotel_dept_pairs == frozenset()


def test_restricted_is_empty_ignores_pairs() -> None:
    """A scope with only pairs is still empty for filtering purposes."""
    assert Restricted().is_empty
    assert make_restricted(pairs=[(1, 2)]).is_empty
    assert not make_restricted(hotel_ids=[1]).is_empty
    assert not make_restricted(department_ids=[1]).is_empty


def test_restricted_to_dict_is_sorted_camel_case() -> None:
    """Exchange shape lists ids and pairs in a stable order."""
    scope = make_restricted(
        hotel_ids=[5, 2], department_ids=[9, 1], pairs=[(5, 9), (2, 1)]
    )
    assert scope.to_dict() == {
        "hotelIds": [2, 5],
        "departmentIds": [1, 9],
        "hotelDeptPairs": [
            {"hotelId": 2, "departmentId": 1},
            {"hotelId": 5, "departmentId": 9},
        ],
    }


def test_unrestricted_to_dict() -> None:
    assert UNRESTRICTED.to_dict() == {"unrestricted": True}
    assert Unrestricted() == UNRESTRICTED


def test_scope_from_dict_reads_both_variants() -> None:
    """scope_from_dict parses what to_dict produces."""
    assert scope_from_dict({"unrestricted": True}) is UNRESTRICTED
    parsed = scope_from_dict(
        {
            "hotelIds": [1],
            "departmentIds": [],
            "hotelDeptPairs": [{"hotelId": 1, "departmentId": 4}],
        }
    )
    assert isinstance(parsed, Restricted)
    assert parsed.hotel_ids == frozenset({1})
    assert parsed.department_ids == frozenset()
    assert parsed.hotel_dept_pairs == frozenset({HotelDepartmentPair(1, 4)})


def test_scope_from_dict_missing_keys_is_empty() -> None:
    assert scope_from_dict({}) == Restricted()
