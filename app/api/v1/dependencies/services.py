"""Application service dependencies (composition root).

Each service has a read variant (read session) and a write variant whose
repositories share the request's single transactional session.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.application.services.permission_service import PermissionService
from app.application.services.role_service import RoleService
from app.application.services.scope_validator import CrossEntityScopeValidator
from app.application.services.user_service import UserService
from app.application.use_cases.contacts import CardService, ContactService
from app.application.use_cases.organization import DepartmentService, HotelService
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

from . import db as db_deps


def get_hotel_service(
    hotel_repo: Annotated[HotelRepository, Depends(db_deps.get_hotel_repo)],
    link_repo: Annotated[
        HotelDepartmentRepository, Depends(db_deps.get_hotel_department_repo)
    ],
    department_repo: Annotated[DepartmentRepository, Depends(db_deps.get_department_repo)],
) -> HotelService:
    return HotelService(hotel_repo, link_repo, department_repo)


def get_hotel_service_for_write(
    hotel_repo: Annotated[HotelRepository, Depends(db_deps.get_hotel_repo_for_write)],
    link_repo: Annotated[
        HotelDepartmentRepository, Depends(db_deps.get_hotel_department_repo_for_write)
    ],
    department_repo: Annotated[
        DepartmentRepository, Depends(db_deps.get_department_repo_for_write)
    ],
) -> HotelService:
    return HotelService(hotel_repo, link_repo, department_repo)


def get_department_service(
    department_repo: Annotated[DepartmentRepository, Depends(db_deps.get_department_repo)],
) -> DepartmentService:
    return DepartmentService(department_repo)


def get_department_service_for_write(
    department_repo: Annotated[
        DepartmentRepository, Depends(db_deps.get_department_repo_for_write)
    ],
) -> DepartmentService:
    return DepartmentService(department_repo)


def get_contact_service(
    contact_repo: Annotated[ContactRepository, Depends(db_deps.get_contact_repo)],
    hotel_repo: Annotated[HotelRepository, Depends(db_deps.get_hotel_repo)],
    department_repo: Annotated[DepartmentRepository, Depends(db_deps.get_department_repo)],
) -> ContactService:
    return ContactService(
        contact_repo, hotel_repo, department_repo, CrossEntityScopeValidator(contact_repo)
    )


def get_contact_service_for_write(
    contact_repo: Annotated[
        ContactRepository, Depends(db_deps.get_contact_repo_for_write)
    ],
    hotel_repo: Annotated[HotelRepository, Depends(db_deps.get_hotel_repo_for_write)],
    department_repo: Annotated[
        DepartmentRepository, Depends(db_deps.get_department_repo_for_write)
    ],
) -> ContactService:
    """Contact service; the scope validator reads inside the write transaction."""
    return ContactService(
        contact_repo, hotel_repo, department_repo, CrossEntityScopeValidator(contact_repo)
    )


def get_card_service(
    card_repo: Annotated[CardRepository, Depends(db_deps.get_card_repo)],
    contact_repo: Annotated[ContactRepository, Depends(db_deps.get_contact_repo)],
) -> CardService:
    return CardService(card_repo, CrossEntityScopeValidator(contact_repo))


def get_card_service_for_write(
    card_repo: Annotated[CardRepository, Depends(db_deps.get_card_repo_for_write)],
    contact_repo: Annotated[
        ContactRepository, Depends(db_deps.get_contact_repo_for_write)
    ],
) -> CardService:
    return CardService(card_repo, CrossEntityScopeValidator(contact_repo))


def get_permission_service(
    permission_repo: Annotated[PermissionRepository, Depends(db_deps.get_permission_repo)],
) -> PermissionService:
    return PermissionService(permission_repo)


def get_permission_service_for_write(
    permission_repo: Annotated[
        PermissionRepository, Depends(db_deps.get_permission_repo_for_write)
    ],
) -> PermissionService:
    return PermissionService(permission_repo)


def get_role_service(
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo)],
    permission_repo: Annotated[PermissionRepository, Depends(db_deps.get_permission_repo)],
    role_permission_repo: Annotated[
        RolePermissionRepository, Depends(db_deps.get_role_permission_repo)
    ],
) -> RoleService:
    return RoleService(role_repo, permission_repo, role_permission_repo)


def get_role_service_for_write(
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo_for_write)],
    permission_repo: Annotated[
        PermissionRepository, Depends(db_deps.get_permission_repo_for_write)
    ],
    role_permission_repo: Annotated[
        RolePermissionRepository, Depends(db_deps.get_role_permission_repo_for_write)
    ],
) -> RoleService:
    return RoleService(role_repo, permission_repo, role_permission_repo)


def get_user_service(
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo)],
    user_role_repo: Annotated[UserRoleRepository, Depends(db_deps.get_user_role_repo)],
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo)],
    scope_repo: Annotated[ScopeRepository, Depends(db_deps.get_scope_repo)],
    hotel_repo: Annotated[HotelRepository, Depends(db_deps.get_hotel_repo)],
    department_repo: Annotated[DepartmentRepository, Depends(db_deps.get_department_repo)],
) -> UserService:
    return UserService(
        user_repo, user_role_repo, role_repo, scope_repo, hotel_repo, department_repo
    )


def get_user_service_for_write(
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo_for_write)],
    user_role_repo: Annotated[
        UserRoleRepository, Depends(db_deps.get_user_role_repo_for_write)
    ],
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo_for_write)],
    scope_repo: Annotated[ScopeRepository, Depends(db_deps.get_scope_repo_for_write)],
    hotel_repo: Annotated[HotelRepository, Depends(db_deps.get_hotel_repo_for_write)],
    department_repo: Annotated[
        DepartmentRepository, Depends(db_deps.get_department_repo_for_write)
    ],
) -> UserService:
    return UserService(
        user_repo, user_role_repo, role_repo, scope_repo, hotel_repo, department_repo
    )
