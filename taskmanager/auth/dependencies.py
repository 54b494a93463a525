"""Request gate and role checks as FastAPI dependencies."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Depends, Request

from ..core.errors import AppError, Forbidden, TokenInvalid, TokenMissing
from ..models import Role
from .tokens import verify_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Caller identity taken from a verified token."""

    user_id: str
    role: Role

    @property
    def uuid(self) -> uuid.UUID:
        return uuid.UUID(self.user_id)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def extract_bearer_token(header: Optional[str]) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header."""

    if not header or not header.strip():
        raise TokenMissing()
    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise TokenInvalid()
    return parts[1]


def require_identity(request: Request) -> Identity:
    """Verify the bearer token and attach the caller to ``request.state``."""

    try:
        token = extract_bearer_token(request.headers.get("authorization"))
        claims = verify_token(token)
    except AppError as exc:
        logger.info("Denied %s %s: %s", request.method, request.url.path, exc.code)
        raise

    try:
        uuid.UUID(claims.user_id)
    except ValueError as exc:
        raise TokenInvalid() from exc

    identity = Identity(user_id=claims.user_id, role=claims.role)
    request.state.identity = identity
    return identity


def check_role(role: Role, required: Role) -> None:
    """Raise ``Forbidden`` unless ``role`` satisfies ``required``."""

    if required is Role.USER or role is required:
        return
    raise Forbidden()


def require_role(required: Role) -> Callable[..., Identity]:
    """Build a dependency that gates a route on ``required``."""

    def dependency(identity: Identity = Depends(require_identity)) -> Identity:
        check_role(identity.role, required)
        return identity

    return dependency


require_admin = require_role(Role.ADMIN)


__all__ = [
    "Identity",
    "check_role",
    "extract_bearer_token",
    "require_admin",
    "require_identity",
    "require_role",
]
