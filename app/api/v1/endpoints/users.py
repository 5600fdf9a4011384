"""Users API: administration of existing users, their roles and their scope."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    CurrentPrincipal,
    audited,
    get_user_service,
    get_user_service_for_write,
    require_permission,
    snapshot_with,
)
from app.application.services import UserService
from app.application.services.audit_recorder import AuditTrail
from app.core.limiter import limit_writes
from app.domain.enums import PermissionKey
from app.infrastructure.persistence.repositories import ScopeRepository, UserRepository
from app.infrastructure.persistence.repositories.base import serialize_row
from app.schemas.user import ScopeBody, UserResponse, UserRoleAssign, UserRoleResponse
from app.shared.enums import AuditAction, AuditEntityType

router = APIRouter()

_user_snapshot = snapshot_with(UserRepository)
_view_users = require_permission(PermissionKey.USER_VIEW)


@router.get("", response_model=list[UserResponse])
async def list_users(
    service: Annotated[UserService, Depends(get_user_service)],
    _: Annotated[object, Depends(_view_users)] = None,
    status: Annotated[bool | None, Query(description="Filter by is_active")] = None,
    q: Annotated[str | None, Query(max_length=200)] = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List live users with their role names; search matches username, email or full name."""
    users = await service.list_users(is_active=status, q=q, skip=skip, limit=limit)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
    _: Annotated[object, Depends(_view_users)] = None,
):
    return UserResponse.model_validate(await service.get_user(user_id))


@router.delete("/{user_id}", status_code=204)
@limit_writes
async def delete_user(
    request: Request,
    user_id: int,
    principal: CurrentPrincipal,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.USER_DELETE,
                AuditEntityType.USER,
                PermissionKey.USER_DELETE,
                entity_param="user_id",
                snapshot=_user_snapshot,
            )
        ),
    ],
    service: Annotated[UserService, Depends(get_user_service_for_write)],
):
    """Soft-delete a user. Deleting your own account is refused (400)."""
    user = await service.delete_user(user_id, deleted_by=principal.user_id)
    trail.record_result(new_values=serialize_row(user), status_code=204)


@router.patch("/{user_id}/toggle-active", response_model=UserResponse)
@limit_writes
async def toggle_user_active(
    request: Request,
    user_id: int,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.TOGGLE_ACTIVE,
                AuditEntityType.USER,
                PermissionKey.USER_EDIT,
                entity_param="user_id",
                snapshot=_user_snapshot,
            )
        ),
    ],
    service: Annotated[UserService, Depends(get_user_service_for_write)],
):
    """Flip is_active; an inactive user can no longer authenticate."""
    user = await service.toggle_active(user_id)
    response = UserResponse.model_validate(user)
    trail.record_result(new_values=response.model_dump(mode="json"))
    return response


@router.get("/{user_id}/roles", response_model=list[UserRoleResponse])
async def list_user_roles(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
    _: Annotated[object, Depends(_view_users)] = None,
):
    roles = await service.list_user_roles(user_id)
    return [UserRoleResponse.model_validate(r) for r in roles]


@router.post("/{user_id}/roles", response_model=UserRoleResponse, status_code=201)
@limit_writes
async def assign_user_role(
    request: Request,
    user_id: int,
    body: UserRoleAssign,
    principal: CurrentPrincipal,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.USER_ROLE_ASSIGN,
                AuditEntityType.USER_ROLE,
                PermissionKey.ROLE_MANAGE,
                entity_param="user_id",
            )
        ),
    ],
    service: Annotated[UserService, Depends(get_user_service_for_write)],
):
    """Give a user a role; 409 if the user already holds it."""
    role = await service.assign_role(
        user_id, body.role_id, assigned_by=principal.user_id
    )
    trail.record_result(
        new_values={"user_id": user_id, "role_id": role.id, "role_name": role.name},
        status_code=201,
    )
    return UserRoleResponse.model_validate(role)


@router.delete("/{user_id}/roles/{role_id}", status_code=204)
@limit_writes
async def remove_user_role(
    request: Request,
    user_id: int,
    role_id: int,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.USER_ROLE_REMOVE,
                AuditEntityType.USER_ROLE,
                PermissionKey.ROLE_MANAGE,
                entity_param="user_id",
            )
        ),
    ],
    service: Annotated[UserService, Depends(get_user_service_for_write)],
):
    await service.remove_role(user_id, role_id)
    trail.old_values = {"user_id": user_id, "role_id": role_id, "assigned": True}
    trail.record_result(
        new_values={"user_id": user_id, "role_id": role_id, "assigned": False},
        status_code=204,
    )


@router.get("/{user_id}/scope", response_model=ScopeBody, response_model_by_alias=True)
async def get_user_scope(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
    _: Annotated[object, Depends(_view_users)] = None,
):
    """Stored hotel, department and pair assignments of a user."""
    return ScopeBody.from_scope(await service.get_scope(user_id))


@router.put("/{user_id}/scope", response_model=ScopeBody, response_model_by_alias=True)
@limit_writes
async def replace_user_scope(
    request: Request,
    user_id: int,
    body: ScopeBody,
    trail: Annotated[
        AuditTrail,
        Depends(
            audited(
                AuditAction.USER_SCOPE_UPDATE,
                AuditEntityType.USER_SCOPE,
                PermissionKey.USER_EDIT,
                entity_param="user_id",
                snapshot=snapshot_with(ScopeRepository),
            )
        ),
    ],
    service: Annotated[UserService, Depends(get_user_service_for_write)],
):
    """Replace all three assignment sets at once; readers never see a partial scope."""
    scope = await service.replace_scope(
        user_id, set(body.hotel_ids), set(body.department_ids), body.pairs()
    )
    trail.record_result(new_values=scope.to_dict())
    return ScopeBody.from_scope(scope)
