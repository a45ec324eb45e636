"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import Depends, Header

from core.config import Settings, get_settings
from core.errors import Forbidden, Unauthenticated

from . import security


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise Unauthenticated("Missing token")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise Unauthenticated("Missing token")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise Unauthenticated("Missing token")
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_claims(
    token: str = Depends(get_bearer_token),
    settings: Settings = Depends(get_settings),
) -> security.Claims:
    result = security.decode_access_token(token, settings)
    if isinstance(result, security.AuthFailure):
        raise Unauthenticated(result.reason)
    return result


def require_role(role: str) -> Callable[..., Awaitable[security.Claims]]:
    """
    Build a dependency that admits only tokens issued for `role`.
    """
    if role not in security.ROLES:
        raise ValueError(f"Unknown role: {role!r}")

    async def _guard(claims: security.Claims = Depends(get_claims)) -> security.Claims:
        if claims.role != role:
            raise Forbidden("Forbidden")
        return claims

    return _guard


require_admin = require_role(security.ROLE_ADMIN)
require_staff = require_role(security.ROLE_STAFF)
