"""
JWT creation and validation.

Tokens are stateless: verification checks the signature and expiry only and
never reads the user table. A user who is demoted or deleted keeps a working
token until it expires, at most ``TOKEN_TTL_SECONDS`` later.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import jwt

from ..core.config import JWT_ALGORITHM, JWT_SECRET, TOKEN_TTL_SECONDS
from ..core.errors import TokenExpired, TokenInvalid, TokenMissing
from ..core.time import utcnow
from ..models import Role, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    role: Role
    issued_at: int
    expires_at: int


def issue_token(
    user: User,
    *,
    now: Optional[datetime] = None,
    secret: str = JWT_SECRET,
) -> str:
    """Create a signed access token for ``user`` valid for one hour."""

    issued = now or utcnow()
    payload = {
        "id": str(user.id),
        "role": user.role,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(seconds=TOKEN_TTL_SECONDS)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def verify_token(token: Optional[str], *, secret: str = JWT_SECRET) -> TokenClaims:
    """Decode ``token`` or raise the matching token error."""

    if not token:
        raise TokenMissing()

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpired() from exc
    except jwt.InvalidTokenError as exc:
        logger.debug("Rejected token: %s", exc)
        raise TokenInvalid() from exc

    user_id = payload.get("id")
    role = payload.get("role")
    if not isinstance(user_id, str) or not user_id:
        raise TokenInvalid()
    try:
        parsed_role = Role(role)
    except ValueError as exc:
        raise TokenInvalid() from exc

    return TokenClaims(
        user_id=user_id,
        role=parsed_role,
        issued_at=int(payload["iat"]),
        expires_at=int(payload["exp"]),
    )


__all__ = ["TokenClaims", "issue_token", "verify_token"]
