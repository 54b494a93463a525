"""Helpers for user accounts."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlmodel import Session

from ..auth.passwords import get_user_by_email, register_user
from ..core.time import isoformat
from ..models import Role, User

logger = logging.getLogger(__name__)


def user_to_dict(user: User) -> Dict[str, Any]:
    """Public view of a user; never includes the password hash."""

    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "provider": user.provider,
        "has_password": user.password_hash is not None,
        "created_at": isoformat(user.created_at),
    }


def ensure_admin(
    session: Session,
    *,
    email: Optional[str],
    password: Optional[str],
    name: str,
) -> Optional[User]:
    """Create the bootstrap admin account when it does not exist yet."""

    if not email or not password:
        return None
    existing = get_user_by_email(session, email)
    if existing:
        return existing
    user = register_user(session, name=name, email=email, password=password, role=Role.ADMIN)
    logger.info("Seeded admin account %s", user.id)
    return user


__all__ = ["ensure_admin", "user_to_dict"]
