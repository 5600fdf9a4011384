"""Unit tests for ScopeResolver with an in-memory scope directory."""

import pytest

from app.application.services.scope_resolver import ScopeResolver
from app.domain.exceptions import InfrastructureException
from app.domain.value_objects.scope import UNRESTRICTED, HotelDepartmentPair, Restricted


class FakeScopeDirectory:
    """In-memory IScopeDirectory."""

    def __init__(self, hotels=None, departments=None, pairs=None, fail=False) -> None:
        self.hotels = hotels or {}
        self.departments = departments or {}
        self.pairs = pairs or {}
        self.fail = fail
        self.calls = 0

    async def get_hotel_ids(self, user_id: int) -> set[int]:
        self.calls += 1
        if self.fail:
            raise InfrastructureException(operation="read user hotels")
        return set(self.hotels.get(user_id, ()))

    async def get_department_ids(self, user_id: int) -> set[int]:
        self.calls += 1
        return set(self.departments.get(user_id, ()))

    async def get_hotel_department_pairs(self, user_id: int) -> set[HotelDepartmentPair]:
        self.calls += 1
        return set(self.pairs.get(user_id, ()))

    async def replace_scope(self, user_id, hotel_ids, department_ids, pairs) -> None:
        self.hotels[user_id] = set(hotel_ids)
        self.departments[user_id] = set(department_ids)
        self.pairs[user_id] = set(pairs)


async def test_admin_is_unrestricted_without_reading_assignments() -> None:
    directory = FakeScopeDirectory(hotels={1: {5}})
    scope = await ScopeResolver(directory).resolve(1, is_admin=True)
    assert scope is UNRESTRICTED
    assert directory.calls == 0


async def test_non_admin_gets_stored_assignments() -> None:
    directory = FakeScopeDirectory(
        hotels={7: {1, 2}},
        departments={7: {3}},
        pairs={7: {HotelDepartmentPair(1, 3)}},
    )
    scope = await ScopeResolver(directory).resolve(7, is_admin=False)
    assert scope == Restricted(
        hotel_ids=frozenset({1, 2}),
        department_ids=frozenset({3}),
        hotel_dept_pairs=frozenset({HotelDepartmentPair(1, 3)}),
    )


async def test_user_without_assignments_gets_empty_scope() -> None:
    scope = await ScopeResolver(FakeScopeDirectory()).resolve(9, is_admin=False)
    assert isinstance(scope, Restricted)
    assert scope.is_empty


async def test_scope_is_read_fresh_each_time() -> None:
    """A replaced assignment is visible to the next resolution."""
    directory = FakeScopeDirectory(hotels={4: {1}})
    resolver = ScopeResolver(directory)
    before = await resolver.resolve(4, is_admin=False)
    await directory.replace_scope(4, {2}, set(), set())
    after = await resolver.resolve(4, is_admin=False)
    assert before.hotel_ids == frozenset({1})
    assert after.hotel_ids == frozenset({2})


async def test_storage_failure_propagates() -> None:
    with pytest.raises(InfrastructureException):
        await ScopeResolver(FakeScopeDirectory(fail=True)).resolve(1, is_admin=False)
