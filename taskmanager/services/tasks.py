"""Helpers for task domain objects."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from ..core.time import isoformat
from ..models import Task


def tags_from_task(task: Task) -> List[str]:
    """Extract the tag list from stored JSON."""

    return json.loads(task.tags_json or "[]")


def task_to_dict(task: Task) -> Dict[str, Any]:
    """Serialise a task model to API-friendly dict."""

    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "priority": task.priority,
        "status": task.status,
        "due_date": isoformat(task.due_date),
        "owner_id": str(task.owner_id) if task.owner_id else None,
        "project_id": task.project_id,
        "tags": tags_from_task(task),
        "created_at": isoformat(task.created_at),
        "updated_at": isoformat(task.updated_at),
    }


__all__ = ["tags_from_task", "task_to_dict"]
