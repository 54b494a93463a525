"""Database model for tasks."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

TASK_PRIORITIES = ("Low", "Medium", "High")
TASK_STATUSES = ("Pending", "In Progress", "Completed")


class Task(SQLModel, table=True):
    """Unit of work, optionally grouped under a project."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    title: str
    description: str = ""
    priority: str = "Low"
    status: str = "Pending"
    due_date: Optional[datetime] = None
    owner_id: Optional[uuid.UUID] = ORMField(default=None, index=True)
    project_id: Optional[int] = ORMField(default=None, index=True)
    tags_json: str = "[]"
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["TASK_PRIORITIES", "TASK_STATUSES", "Task"]
