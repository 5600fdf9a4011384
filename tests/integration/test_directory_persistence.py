"""Integration tests against SQLite: scope storage, role permissions, soft delete and the audit log."""

from datetime import UTC, datetime

import pytest
from sqlalchemy import select

from app.application.dtos.audit_log import AuditLogEntryCreate
from app.application.services.scope_filter_compiler import CONTACT_FIELDS, compile_scope_filter
from app.application.services.scope_resolver import ScopeResolver
from app.domain.exceptions import DuplicateAssignmentException
from app.domain.value_objects.scope import HotelDepartmentPair, Restricted, make_restricted
from app.infrastructure.persistence.models.audit_log import AuditLog
from app.infrastructure.persistence.repositories import (
    AuditLogRepository,
    ContactRepository,
    HotelRepository,
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    ScopeRepository,
    UserRoleRepository,
)
from app.infrastructure.services.principal_resolver import PrincipalResolver


def _entry(action: str, *, user_id: int | None = None, ip: str | None = None) -> AuditLogEntryCreate:
    return AuditLogEntryCreate(
        user_id=user_id,
        action_name=action,
        entity_type="HOTEL",
        entity_id="1",
        success=True,
        error_message=None,
        ip_address=ip,
        mac_address=None,
        device_name="pytest",
        old_values=None,
        new_values={"id": 1},
        timestamp=datetime.now(UTC),
    )


async def test_replace_scope_swaps_all_three_sets(directory, session_factory) -> None:
    h1, h2 = await directory.hotel("Alpha"), await directory.hotel("Beta")
    d1 = await directory.department("Front Office")
    user_id = await directory.user("rita", hotels=[h1], departments=[d1], pairs=[(h1, d1)])

    async with session_factory() as session, session.begin():
        await ScopeRepository(session).replace_scope(user_id, {h2}, set(), set())

    async with session_factory() as session:
        scope = await ScopeResolver(ScopeRepository(session)).resolve(user_id, is_admin=False)
    assert scope == Restricted(hotel_ids=frozenset({h2}))


async def test_failed_scope_replace_keeps_previous_scope(directory, session_factory) -> None:
    h1 = await directory.hotel("Alpha")
    user_id = await directory.user("sam", hotels=[h1])

    with pytest.raises(RuntimeError):
        async with session_factory() as session, session.begin():
            await ScopeRepository(session).replace_scope(user_id, set(), set(), set())
            raise RuntimeError("abort")

    async with session_factory() as session:
        assert await ScopeRepository(session).get_hotel_ids(user_id) == {h1}


async def test_deleted_hotel_drops_out_of_scope(directory, session_factory) -> None:
    h1, h2 = await directory.hotel("Alpha"), await directory.hotel("Beta")
    d1 = await directory.department("Kitchen")
    user_id = await directory.user("tia", hotels=[h1, h2], pairs=[(h2, d1)])

    async with session_factory() as session, session.begin():
        repo = HotelRepository(session)
        await repo.soft_delete(await repo.require_live(h2), deleted_by=user_id)

    async with session_factory() as session:
        snapshot = await ScopeRepository(session).snapshot(user_id)
    assert snapshot == {"hotelIds": [h1], "departmentIds": [], "hotelDeptPairs": []}


async def test_role_permissions_bulk_set_and_clear(directory, session_factory) -> None:
    await directory.user("uma", permissions=["HOTEL_VIEW", "CONTACT_VIEW", "CARD_VIEW"])

    async with session_factory() as session, session.begin():
        role = await RoleRepository(session).get_by_name("UMA_ROLE")
        permissions = PermissionRepository(session)
        hotel_view = await permissions.get_by_key("HOTEL_VIEW")
        links = RolePermissionRepository(session)
        await links.set_role_permissions(role.id, {hotel_view.id})
        assert await links.get_permission_ids_for_role(role.id) == {hotel_view.id}
        await links.set_role_permissions(role.id, set())
        assert await links.get_permission_ids_for_role(role.id) == set()


async def test_duplicate_role_assignment_is_rejected(directory, session_factory) -> None:
    user_id = await directory.user("vic", permissions=["HOTEL_VIEW"])
    async with session_factory() as session:
        role = await RoleRepository(session).get_by_name("VIC_ROLE")
        with pytest.raises(DuplicateAssignmentException) as exc_info:
            await UserRoleRepository(session).assign_role_to_user(user_id, role.id)
    assert exc_info.value.details["assignment_type"] == "user_role"


async def test_soft_deleted_contact_is_invisible(directory, session_factory) -> None:
    h1, d1 = await directory.hotel("Alpha"), await directory.department("Spa")
    await directory.link(h1, d1)
    keep = await directory.contact(h1, d1, "Keep")
    gone = await directory.contact(h1, d1, "Gone")

    async with session_factory() as session, session.begin():
        repo = ContactRepository(session)
        await repo.soft_delete(await repo.require_live(gone))

    async with session_factory() as session:
        repo = ContactRepository(session)
        predicate = compile_scope_filter(make_restricted(hotel_ids=[h1]), CONTACT_FIELDS)
        contacts, total = await repo.list_scoped(predicate)
        assert [c.id for c in contacts] == [keep]
        assert total == 1
        assert await repo.get_live(gone) is None


async def test_scope_filter_applies_in_sql(directory, session_factory) -> None:
    h1, h2 = await directory.hotel("Alpha"), await directory.hotel("Beta")
    d1, d2 = await directory.department("Spa"), await directory.department("Bar")
    a = await directory.contact(h1, d1, "A")
    await directory.contact(h1, d2, "B")
    await directory.contact(h2, d1, "C")

    async with session_factory() as session:
        repo = ContactRepository(session)
        scope = make_restricted(hotel_ids=[h1], department_ids=[d1])
        contacts, _ = await repo.list_scoped(compile_scope_filter(scope, CONTACT_FIELDS))
        assert [c.id for c in contacts] == [a]
        empty, total = await repo.list_scoped(
            compile_scope_filter(make_restricted(), CONTACT_FIELDS)
        )
        assert empty == [] and total == 0


async def test_toggle_active_twice_restores_state(directory, session_factory) -> None:
    h1 = await directory.hotel("Alpha")
    async with session_factory() as session, session.begin():
        repo = HotelRepository(session)
        hotel = await repo.require_live(h1)
        await repo.toggle_active(hotel)
        assert hotel.is_active is False
        await repo.toggle_active(hotel)
        assert hotel.is_active is True


async def test_audit_log_rows_are_immutable(session_factory) -> None:
    async with session_factory() as session, session.begin():
        created = await AuditLogRepository(session).create(_entry("HOTEL_CREATE"))

    async with session_factory() as session:
        row = (
            await session.execute(select(AuditLog).where(AuditLog.id == created.id))
        ).scalar_one()
        row.action_name = "TAMPERED"
        with pytest.raises(ValueError):
            await session.flush()
        await session.rollback()

    async with session_factory() as session:
        row = (
            await session.execute(select(AuditLog).where(AuditLog.id == created.id))
        ).scalar_one()
        await session.delete(row)
        with pytest.raises(ValueError):
            await session.flush()


async def test_audit_list_page_search_and_paging(directory, session_factory) -> None:
    user_id = await directory.user("walt")
    async with session_factory() as session, session.begin():
        repo = AuditLogRepository(session)
        for i in range(5):
            await repo.create(_entry("HOTEL_EDIT", ip=f"10.0.0.{i}"))
        await repo.create(_entry("CONTACT_CREATE", user_id=user_id))

    async with session_factory() as session:
        repo = AuditLogRepository(session)
        page = await repo.list_page(page=2, limit=4)
        assert page.total == 6
        assert page.total_pages == 2
        assert len(page.items) == 2

        by_user = await repo.list_page(page=1, limit=10, q="WALT")
        assert [e.action_name for e in by_user.items] == ["CONTACT_CREATE"]
        assert by_user.items[0].username == "walt"

        by_ip = await repo.list_page(page=1, limit=10, q="10.0.0.3")
        assert by_ip.total == 1


async def test_principal_resolution(directory, session_factory) -> None:
    active = await directory.user("xena", permissions=["HOTEL_VIEW"])
    inactive = await directory.user("yuri", permissions=["HOTEL_VIEW"], active=False)

    async with session_factory() as session:
        resolver = PrincipalResolver(session)
        principal = await resolver.resolve(active)
        assert principal is not None
        assert principal.roles == frozenset({"XENA_ROLE"})
        assert principal.holds("HOTEL_VIEW")
        assert await resolver.resolve(inactive) is None
        assert await resolver.resolve(9999) is None


async def test_deleted_role_contributes_nothing(directory, session_factory) -> None:
    user_id = await directory.user("zoe", permissions=["CONTACT_VIEW"])
    async with session_factory() as session, session.begin():
        repo = RoleRepository(session)
        await repo.soft_delete(await repo.get_by_name("ZOE_ROLE"))

    async with session_factory() as session:
        principal = await PrincipalResolver(session).resolve(user_id)
    assert principal is not None
    assert principal.roles == frozenset()
    assert principal.permissions == frozenset()


async def test_pairs_survive_replace(directory, session_factory) -> None:
    h1, d1 = await directory.hotel("Alpha"), await directory.department("Spa")
    user_id = await directory.user("amy")
    async with session_factory() as session, session.begin():
        await ScopeRepository(session).replace_scope(
            user_id, set(), set(), {HotelDepartmentPair(h1, d1)}
        )
    async with session_factory() as session:
        pairs = await ScopeRepository(session).get_hotel_department_pairs(user_id)
    assert pairs == {HotelDepartmentPair(h1, d1)}
