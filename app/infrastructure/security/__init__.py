"""Security: bearer token verification and the identity provider."""

from app.infrastructure.security.jwt import (
    JwtIdentityProvider,
    create_access_token,
    verify_token,
)

__all__ = [
    "JwtIdentityProvider",
    "create_access_token",
    "verify_token",
]
