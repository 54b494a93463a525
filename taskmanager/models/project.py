"""Database model for projects."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

PROJECT_STATUSES = ("Active", "On Hold", "Completed")


class Project(SQLModel, table=True):
    """Named group of tasks owned by one user and shared with members."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str
    description: str = ""
    owner_id: uuid.UUID = ORMField(index=True)
    members_json: str = "[]"
    status: str = "Active"
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["PROJECT_STATUSES", "Project"]
