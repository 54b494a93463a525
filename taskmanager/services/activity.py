"""Activity log recording."""

from __future__ import annotations

import uuid
from typing import Any, Dict, Union

from sqlmodel import Session

from ..core.time import isoformat
from ..models import ActivityLog


def record_activity(
    session: Session,
    *,
    user_id: Union[str, uuid.UUID],
    action: str,
    entity: str,
    entity_id: Any,
    details: str = "",
) -> ActivityLog:
    """Stage an activity entry; the caller's commit persists it."""

    entry = ActivityLog(
        user_id=uuid.UUID(str(user_id)),
        action=action,
        entity=entity,
        entity_id=str(entity_id),
        details=details,
    )
    session.add(entry)
    return entry


def activity_log_to_dict(entry: ActivityLog) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "user_id": str(entry.user_id),
        "action": entry.action,
        "entity": entry.entity,
        "entity_id": entry.entity_id,
        "details": entry.details,
        "timestamp": isoformat(entry.timestamp),
    }


__all__ = ["activity_log_to_dict", "record_activity"]
