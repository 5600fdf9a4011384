"""JWT verification (identity provider) and token minting for scripts and tests.

Uses app.core.config for secret and algorithm. Token issuance for end users
belongs to the external identity service; create_access_token exists so seed
scripts and tests can produce tokens this service accepts.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode; ``sub`` must be the user id as a string.
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.now(UTC) + (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode["exp"] = expire
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Raises:
        ValueError: If token is invalid, expired, or missing exp/sub.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if "sub" not in payload:
        raise ValueError("Token missing required claim: sub")
    return payload


class JwtIdentityProvider:
    """Identity provider backed by HS256 bearer tokens (implements IIdentityProvider)."""

    def authenticate(self, credential: str) -> int:
        """Return the actor id from ``sub``; raise AuthenticationException otherwise."""
        try:
            payload = verify_token(credential)
            return int(payload["sub"])
        except (ValueError, TypeError, KeyError):
            raise AuthenticationException("Invalid or expired token") from None
