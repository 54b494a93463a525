"""Database model for the admin activity log."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class ActivityLog(SQLModel, table=True):
    """Record of who changed which entity."""

    __tablename__ = "activity_log"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    user_id: uuid.UUID = ORMField(index=True)
    action: str
    entity: str
    entity_id: str
    details: str = ""
    timestamp: datetime = ORMField(default_factory=utcnow, index=True)


__all__ = ["ActivityLog"]
