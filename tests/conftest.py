"""Pytest configuration and fixtures for the hotel directory.

Every test that touches storage gets its own SQLite file (aiosqlite) with the
schema created from the ORM metadata, a fresh engine bound to the test's
event loop, and a running audit dispatcher. Users, roles, scope and records
are inserted through the repositories; requests authenticate with tokens
minted by create_access_token. All imports use app.*.
"""

import os
from collections.abc import AsyncIterator, Iterable

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-directory-tests")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test-directory.db")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.config import get_settings
from app.core.limiter import limiter
from app.domain.value_objects.scope import HotelDepartmentPair
from app.infrastructure.persistence import database, models
from app.infrastructure.persistence.database import Base, get_session_factory
from app.infrastructure.persistence.repositories import (
    CardRepository,
    ContactRepository,
    DepartmentRepository,
    HotelDepartmentRepository,
    HotelRepository,
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    ScopeRepository,
    UserRepository,
    UserRoleRepository,
)
from app.infrastructure.security.jwt import create_access_token
from app.infrastructure.services.audit_dispatcher import AuditDispatcher
from app.main import app


class Directory:
    """Inserts directory data for a test and reads back audit rows."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def user(
        self,
        username: str,
        *,
        permissions: Iterable[str] = (),
        admin: bool = False,
        hotels: Iterable[int] = (),
        departments: Iterable[int] = (),
        pairs: Iterable[tuple[int, int]] = (),
        active: bool = True,
    ) -> int:
        """Create a user holding one role with the given permission keys and scope."""
        async with self.session_factory() as session, session.begin():
            user = await UserRepository(session).create_user(username)
            if not active:
                user.is_active = False
                await session.flush()
            role_repo = RoleRepository(session)
            role_name = "ADMIN" if admin else f"{username.upper()}_ROLE"
            role = await role_repo.get_by_name(role_name) or await role_repo.create_role(
                role_name
            )
            permission_repo = PermissionRepository(session)
            ids: set[int] = set()
            for key in permissions:
                key = str(getattr(key, "value", key))
                permission = await permission_repo.get_by_key(key)
                if permission is None:
                    module, _, action = key.rpartition("_")
                    permission = await permission_repo.create_permission(
                        perm_key=key, module_name=module, action_name=action
                    )
                ids.add(permission.id)
            if ids:
                await RolePermissionRepository(session).set_role_permissions(role.id, ids)
            await UserRoleRepository(session).assign_role_to_user(user.id, role.id)
            await ScopeRepository(session).replace_scope(
                user.id,
                set(hotels),
                set(departments),
                {HotelDepartmentPair(h, d) for h, d in pairs},
            )
            return user.id

    async def hotel(self, name: str, location: str | None = None) -> int:
        async with self.session_factory() as session, session.begin():
            return (await HotelRepository(session).create_hotel(name, location)).id

    async def department(self, name: str, description: str | None = None) -> int:
        async with self.session_factory() as session, session.begin():
            repo = DepartmentRepository(session)
            return (await repo.create_department(name, description)).id

    async def link(self, hotel_id: int, department_id: int) -> None:
        async with self.session_factory() as session, session.begin():
            repo = HotelDepartmentRepository(session)
            current = {d.id for d in await repo.list_departments_for_hotel(hotel_id)}
            await repo.sync(hotel_id, current | {department_id})

    async def contact(self, hotel_id: int, department_id: int, name: str = "Front Desk") -> int:
        async with self.session_factory() as session, session.begin():
            contact = await ContactRepository(session).create_contact(
                name=name, hotel_id=hotel_id, department_id=department_id
            )
            return contact.id

    async def card(self, contact_id: int, label: str = "Phone", value: str = "555-0100") -> int:
        async with self.session_factory() as session, session.begin():
            card = await CardRepository(session).create_card(
                contact_id=contact_id, label=label, value=value, notes=None
            )
            return card.id

    async def audit_rows(self) -> list[models.AuditLog]:
        """All audit rows, oldest first."""
        async with self.session_factory() as session:
            result = await session.execute(
                select(models.AuditLog).order_by(models.AuditLog.id)
            )
            return list(result.scalars().all())

    async def count(self, model: type[Base]) -> int:
        async with self.session_factory() as session:
            result = await session.execute(select(model))
            return len(result.scalars().all())


def bearer_header(user_id: int) -> dict[str, str]:
    """Bearer header for user_id."""
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user_id)})}"}


@pytest.fixture
async def session_factory(tmp_path, monkeypatch) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Fresh SQLite database with the full schema; engine disposed after the test."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'directory.db'}")
    get_settings.cache_clear()
    database.engine = None
    database.AsyncSessionLocal = None
    factory = get_session_factory()
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield factory
    await database.engine.dispose()
    database.engine = None
    database.AsyncSessionLocal = None
    get_settings.cache_clear()


@pytest.fixture
async def dispatcher(session_factory) -> AsyncIterator[AuditDispatcher]:
    """Audit dispatcher installed on app.state as the lifespan would."""
    audit = AuditDispatcher(session_factory)
    audit.start()
    app.state.audit_dispatcher = audit
    yield audit
    await audit.stop(timeout=5)
    app.state.audit_dispatcher = None


@pytest.fixture
def directory(session_factory) -> Directory:
    return Directory(session_factory)


@pytest.fixture
async def client(dispatcher) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI), rate limiting off."""
    limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    """Session for repository/integration tests. Rolls back after the test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def auth_header():
    """Factory: user id → Authorization header with a freshly minted token."""
    return bearer_header
