"""Helpers for project domain objects."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from ..core.time import isoformat
from ..models import Project


def members_from_project(project: Project) -> List[str]:
    return json.loads(project.members_json or "[]")


def project_to_dict(project: Project) -> Dict[str, Any]:
    """Serialise a project model to API-friendly dict."""

    return {
        "id": project.id,
        "name": project.name,
        "description": project.description,
        "owner_id": str(project.owner_id),
        "members": members_from_project(project),
        "status": project.status,
        "created_at": isoformat(project.created_at),
        "updated_at": isoformat(project.updated_at),
    }


__all__ = ["members_from_project", "project_to_dict"]
