"""User repository. Credentials are managed elsewhere; this covers lookup and lifecycle."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.infrastructure.persistence.models.permission import UserRole
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import SoftDeleteRepository


class UserRepository(SoftDeleteRepository[User]):
    """User repository. Deleted users are invisible; inactive users remain listable."""

    resource_name = "user"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    def audit_values(self, obj: User) -> dict[str, Any]:
        return {
            "id": obj.id,
            "username": obj.username,
            "email": obj.email,
            "full_name": obj.full_name,
            "is_active": obj.is_active,
        }

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(self._live().where(User.username == username))
        return result.scalar_one_or_none()

    async def create_user(
        self, username: str, email: str | None = None, full_name: str | None = None
    ) -> User:
        """Insert a directory user (provisioned by the identity service or seed scripts)."""
        return await self.create(User(username=username, email=email, full_name=full_name))

    async def _role_names_by_user(self, user_ids: list[int]) -> dict[int, list[str]]:
        if not user_ids:
            return {}
        result = await self.db.execute(
            select(UserRole.user_id, Role.name)
            .join(Role, Role.id == UserRole.role_id)
            .where(UserRole.user_id.in_(user_ids), Role.deleted_at.is_(None))
            .order_by(Role.name)
        )
        names: dict[int, list[str]] = {uid: [] for uid in user_ids}
        for uid, name in result.all():
            names[uid].append(name)
        return names

    async def list_users(
        self,
        *,
        is_active: bool | None = None,
        q: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[UserResult]:
        """Live users, optionally filtered by is_active and a username/email/full name search."""
        query = self._live()
        if is_active is not None:
            query = query.where(User.is_active == is_active)
        if q and q.strip():
            like = f"%{q.strip().lower()}%"
            query = query.where(
                or_(
                    func.lower(User.username).like(like),
                    func.lower(User.email).like(like),
                    func.lower(User.full_name).like(like),
                )
            )
        result = await self.db.execute(
            query.order_by(User.username).offset(skip).limit(limit)
        )
        users = list(result.scalars().all())
        roles = await self._role_names_by_user([u.id for u in users])
        return [self.to_result(u, roles.get(u.id, [])) for u in users]

    async def get_result(self, user_id: int) -> UserResult | None:
        user = await self.get_live(user_id)
        if user is None:
            return None
        roles = await self._role_names_by_user([user.id])
        return self.to_result(user, roles.get(user.id, []))

    @staticmethod
    def to_result(user: User, roles: list[str] | None = None) -> UserResult:
        return UserResult(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            is_active=user.is_active,
            roles=list(roles or []),
        )
