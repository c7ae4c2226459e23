"""Session token verification (and signing, for operators and tests).

Sessions are issued by the auth service as an HS256 JWT stored in the
``amari_session`` cookie. This module only decodes them into a
:class:`Principal`; login and cookie issuing live elsewhere.
"""


import logging
from datetime import datetime, timedelta, timezone
from typing import Literal

from jose import JWTError, jwt
from pydantic import BaseModel, Field

from amari.core.config import settings

logger = logging.getLogger(__name__)

UserType = Literal["couple", "vendor", "admin"]


class Principal(BaseModel):
    """The authenticated caller behind a request."""

    sub: str
    email: str | None = None
    user_type: UserType = Field(alias="userType")

    model_config = {"populate_by_name": True}

    @property
    def is_admin(self) -> bool:
        return self.user_type == "admin"


def decode_session_token(token: str | None) -> Principal | None:
    """Return the principal for *token*, or ``None`` when it cannot be trusted."""
    if not token:
        return None
    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not configured; treating request as anonymous")
        return None
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return Principal.model_validate(payload)
    except (JWTError, ValueError):
        return None


def create_session_token(
    sub: str,
    user_type: UserType,
    email: str | None = None,
    expires_in: timedelta | None = None,
) -> str:
    if not settings.jwt_secret:
        raise RuntimeError("Missing JWT_SECRET")
    ttl = expires_in or timedelta(days=settings.session_ttl_days)
    claims = {
        "sub": sub,
        "email": email,
        "userType": user_type,
        "exp": datetime.now(timezone.utc) + ttl,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)
