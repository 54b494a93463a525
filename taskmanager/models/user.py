"""Database model for user accounts."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class User(SQLModel, table=True):
    """Account reachable by password, by an OAuth provider, or both."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("provider", "provider_sub", name="uq_users_provider_identity"),
        CheckConstraint(
            "password_hash IS NOT NULL OR provider_sub IS NOT NULL",
            name="ck_users_has_login_path",
        ),
    )

    id: uuid.UUID = ORMField(default_factory=uuid.uuid4, primary_key=True, nullable=False)
    name: str
    email: str = ORMField(index=True, unique=True)
    password_hash: Optional[str] = None
    role: str = ORMField(default=Role.USER.value)
    provider: Optional[str] = None
    provider_sub: Optional[str] = ORMField(default=None, index=True)
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Role", "User"]
