"""Authentication, scope and permission dependencies (composition root).

Order per request: bearer token → actor id (identity provider) → active
principal with roles and permission keys → scope. Permission checks run as
dependencies, so a denied request never reaches the handler or the audit
recorder.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.dtos.principal import Principal
from app.application.interfaces.services import IIdentityProvider
from app.application.services.permission_gate import PermissionGate
from app.application.services.scope_resolver import ScopeResolver
from app.domain.enums import normalize_permission_key
from app.domain.exceptions import AuthenticationException
from app.domain.value_objects.scope import Scope
from app.infrastructure.persistence.repositories import ScopeRepository
from app.infrastructure.security.jwt import JwtIdentityProvider
from app.infrastructure.services.principal_resolver import PrincipalResolver

from .db import ReadSession, get_scope_repo

_http_bearer = HTTPBearer(auto_error=False)
_gate = PermissionGate()


def get_identity_provider() -> IIdentityProvider:
    """Bearer token verifier (composition root)."""
    return JwtIdentityProvider()


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    identity: Annotated[IIdentityProvider, Depends(get_identity_provider)],
    db: ReadSession,
) -> Principal:
    """Return the active principal for the bearer token; 401 otherwise."""
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    user_id = identity.authenticate(credentials.credentials)
    principal = await PrincipalResolver(db).resolve(user_id)
    if principal is None:
        raise AuthenticationException("User not found or inactive")
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


async def get_scope(
    principal: CurrentPrincipal,
    scope_repo: Annotated[ScopeRepository, Depends(get_scope_repo)],
) -> Scope:
    """Effective scope of the current principal, resolved fresh for this request."""
    return await ScopeResolver(scope_repo).resolve(
        principal.user_id, is_admin=principal.is_admin
    )


CurrentScope = Annotated[Scope, Depends(get_scope)]


def require_permission(*keys: str):
    """Dependency factory: require auth and any one of keys (admins always pass)."""
    acceptable = tuple(normalize_permission_key(k) for k in keys)

    async def _require(principal: CurrentPrincipal) -> Principal:
        return _gate.require(principal, *acceptable)

    return _require
