"""Access control gate: bearer tokens, role requirements and ownership.

Every protected route depends on :func:`get_current_identity` (directly or
through :func:`require_role`).  Outcomes:

* no bearer credential -> :class:`Unauthenticated` (401)
* bad signature, malformed or expired token -> :class:`Forbidden` (403)
* wrong role -> :class:`Forbidden` (403)

Per-resource ownership is checked with :func:`verify_ownership` after the
record has been loaded.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional, TypeVar, Union

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from structlog.contextvars import bind_contextvars

from wellness.config import Settings
from wellness.errors import Forbidden, NotFound, Unauthenticated
from wellness.schemas import Goal, Reminder, Role
from wellness.time_utils import utc_now

VALID_ROLES = ("patient", "provider")

# Missing credentials are reported as 401 by the dependency itself rather
# than by FastAPI's built-in 403.
bearer_scheme = HTTPBearer(auto_error=False)

OwnedRecord = TypeVar("OwnedRecord", bound=Union[Goal, Reminder])


@dataclass(frozen=True)
class Identity:
    """Caller identity extracted from a verified token."""

    account_id: str
    role: Role


def create_access_token(
    account_id: str,
    role: str,
    settings: Settings,
    *,
    issued_at: Optional[datetime] = None,
) -> str:
    """Create a signed JWT access token for the given account."""

    iat = issued_at or utc_now()
    payload = {
        "sub": account_id,
        "role": role,
        "iat": iat,
        "exp": iat + timedelta(hours=settings.jwt_expire_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Identity:
    """Verify ``token`` and return the identity it carries."""

    try:
        data = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.PyJWTError:
        raise Forbidden("Invalid or expired token")
    account_id = data.get("sub")
    role = data.get("role")
    if not isinstance(account_id, str) or not account_id or role not in VALID_ROLES:
        raise Forbidden("Invalid or expired token")
    return Identity(account_id=account_id, role=role)


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the app was built with."""

    return request.app.state.settings


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> Identity:
    """Resolve the caller from the ``Authorization: Bearer`` header."""

    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Access token required")
    identity = decode_access_token(credentials.credentials, settings)
    bind_contextvars(account_id=identity.account_id, role=identity.role)
    return identity


def require_role(role: Role) -> Callable[..., Awaitable[Identity]]:
    """Dependency factory ensuring the current caller has ``role``."""

    async def checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role != role:
            raise Forbidden("Access denied: insufficient permissions")
        return identity

    return checker


def verify_ownership(
    record: Optional[OwnedRecord], identity: Identity, *, kind: str
) -> OwnedRecord:
    """Return ``record`` when it exists and belongs to ``identity``."""

    if record is None:
        raise NotFound(f"{kind} not found")
    if record.user_id != identity.account_id:
        raise Forbidden("Access denied")
    return record


__all__ = [
    "Identity",
    "bearer_scheme",
    "create_access_token",
    "decode_access_token",
    "get_app_settings",
    "get_current_identity",
    "require_role",
    "verify_ownership",
]
