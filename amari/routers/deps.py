"""Shared FastAPI dependencies: session lookup and role checks."""


from fastapi import Depends, Request

from amari.core.config import settings
from amari.core.exceptions import ForbiddenError, UnauthorizedError
from amari.core.security import Principal, decode_session_token


def _session_token(request: Request) -> str | None:
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    scheme, _, credentials = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


async def get_current_principal(request: Request) -> Principal | None:
    """The caller's principal, or ``None`` for anonymous requests."""
    return decode_session_token(_session_token(request))


async def require_principal(
    principal: Principal | None = Depends(get_current_principal),
) -> Principal:
    if principal is None:
        raise UnauthorizedError()
    return principal


async def require_admin(principal: Principal = Depends(require_principal)) -> Principal:
    if not principal.is_admin:
        raise ForbiddenError("Admin access required")
    return principal
