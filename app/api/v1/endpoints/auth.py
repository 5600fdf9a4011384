"""Auth API: the current principal, its permission keys and effective scope.

Tokens are issued by the external identity service; this service only
verifies them.
"""

from fastapi import APIRouter

from app.api.v1.dependencies import CurrentPrincipal, CurrentScope
from app.schemas.auth import MeResponse

router = APIRouter()


@router.get("/me", response_model=MeResponse)
async def get_me(principal: CurrentPrincipal, scope: CurrentScope) -> MeResponse:
    """Return the authenticated principal with roles, permissions and scope."""
    return MeResponse(
        id=principal.user_id,
        username=principal.username,
        roles=sorted(principal.roles),
        permissions=sorted(principal.permissions),
        is_admin=principal.is_admin,
        scope=scope.to_dict(),
    )
