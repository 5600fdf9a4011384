"""Seed RBAC: every permission key, the ADMIN role holding all of them, and optionally an admin user.

Usage:
    python -m scripts.seed_rbac [username]

Idempotent: existing permissions, the role and assignments are left as they
are. When a username is given, the user is created if missing and given the
ADMIN role. All imports use app.*.
"""

import asyncio
import sys

from app.domain.enums import PermissionKey
from app.domain.exceptions import DuplicateAssignmentException
from app.infrastructure.persistence.database import get_session_factory
from app.infrastructure.persistence.repositories import (
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    UserRepository,
    UserRoleRepository,
)

ADMIN_ROLE = "ADMIN"


async def main() -> None:
    """Seed permissions and the ADMIN role; assign it to argv[1] when given."""
    username = sys.argv[1] if len(sys.argv) > 1 else None

    async with get_session_factory()() as session:
        async with session.begin():
            permission_repo = PermissionRepository(session)
            permission_ids: set[int] = set()
            created = 0
            for key in PermissionKey:
                permission = await permission_repo.get_by_key(key.value)
                if permission is None:
                    permission = await permission_repo.create_permission(
                        perm_key=key.value,
                        module_name=key.module_name,
                        action_name=key.action_name,
                    )
                    created += 1
                permission_ids.add(permission.id)

            role_repo = RoleRepository(session)
            role = await role_repo.get_by_name(ADMIN_ROLE)
            if role is None:
                role = await role_repo.create_role(
                    ADMIN_ROLE, description="Full access to every hotel and department"
                )
            await RolePermissionRepository(session).set_role_permissions(
                role.id, permission_ids
            )
            print(f"Permissions: {created} created, {len(permission_ids)} total")
            print(f"Role {ADMIN_ROLE} (id={role.id}) holds all permissions")

            if username:
                user_repo = UserRepository(session)
                user = await user_repo.get_by_username(username)
                if user is None:
                    user = await user_repo.create_user(username)
                    print(f"Created user {username} (id={user.id})")
                try:
                    await UserRoleRepository(session).assign_role_to_user(
                        user_id=user.id, role_id=role.id
                    )
                    print(f"Assigned {ADMIN_ROLE} to {username}")
                except DuplicateAssignmentException:
                    print(f"{username} already holds {ADMIN_ROLE}")


if __name__ == "__main__":
    asyncio.run(main())
