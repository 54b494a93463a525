"""Project management endpoints."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import update
from sqlmodel import Session, select

from ...auth import Identity, require_identity
from ...core import get_session, utcnow
from ...core.errors import Forbidden
from ...models import PROJECT_STATUSES, Project, Task
from ...services import (
    members_from_project,
    project_to_dict,
    record_activity,
    task_to_dict,
)
from ..validation import choice, optional_text, require_text, uuid_list

router = APIRouter(prefix="/projects", tags=["projects"])


def _get_project(session: Session, project_id: int) -> Project:
    project = session.get(Project, project_id)
    if not project:
        raise HTTPException(404, "Project not found")
    return project


def _check_owner(project: Project, identity: Identity) -> None:
    if not identity.is_admin and project.owner_id != identity.uuid:
        raise Forbidden("Access denied. Only the project owner can change it.")


@router.get("")
def list_projects(
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_identity),
):
    projects = session.exec(select(Project).order_by(Project.created_at.desc())).all()
    return [project_to_dict(project) for project in projects]


@router.get("/{project_id}")
def get_project(
    project_id: int,
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_identity),
):
    return project_to_dict(_get_project(session, project_id))


@router.get("/{project_id}/tasks")
def list_project_tasks(
    project_id: int,
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_identity),
):
    """List the tasks filed under a project."""

    _get_project(session, project_id)
    tasks = session.exec(
        select(Task).where(Task.project_id == project_id).order_by(Task.created_at.desc())
    ).all()
    return [task_to_dict(task) for task in tasks]


@router.post("", status_code=201)
def create_project(
    body: Dict[str, Any],
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_identity),
):
    project = Project(
        name=require_text(body, "name", "name is required"),
        description=optional_text(body, "description"),
        owner_id=identity.uuid,
        members_json=json.dumps(uuid_list(body, "members")),
        status=choice(body, "status", PROJECT_STATUSES, "Active"),
    )
    session.add(project)
    session.flush()
    record_activity(
        session,
        user_id=identity.user_id,
        action="Created Project",
        entity="Project",
        entity_id=project.id,
        details=project.name,
    )
    session.commit()
    session.refresh(project)
    return project_to_dict(project)


@router.put("/{project_id}")
def update_project(
    project_id: int,
    body: Dict[str, Any],
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_identity),
):
    project = _get_project(session, project_id)
    _check_owner(project, identity)

    changes: List[str] = []
    if "name" in body:
        name = require_text(body, "name", "name is required")
        if name != project.name:
            changes.append(f"name: {project.name} -> {name}")
            project.name = name
    if "description" in body:
        description = optional_text(body, "description")
        if description != project.description:
            changes.append("description updated")
            project.description = description
    if "status" in body:
        status = choice(body, "status", PROJECT_STATUSES, project.status)
        if status != project.status:
            changes.append(f"status: {project.status} -> {status}")
            project.status = status
    if "members" in body:
        members = uuid_list(body, "members")
        if members != members_from_project(project):
            changes.append("members updated")
            project.members_json = json.dumps(members)

    if changes:
        project.updated_at = utcnow()
        session.add(project)
        record_activity(
            session,
            user_id=identity.user_id,
            action="Updated Project",
            entity="Project",
            entity_id=project.id,
            details="; ".join(changes),
        )
        session.commit()
        session.refresh(project)
    return project_to_dict(project)


@router.delete("/{project_id}", status_code=204)
def delete_project(
    project_id: int,
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_identity),
):
    """Delete a project; its tasks are kept and detached."""

    project = _get_project(session, project_id)
    _check_owner(project, identity)

    session.execute(
        update(Task).where(Task.project_id == project_id).values(project_id=None)
    )
    session.delete(project)
    record_activity(
        session,
        user_id=identity.user_id,
        action="Deleted Project",
        entity="Project",
        entity_id=project_id,
        details=project.name,
    )
    session.commit()
    return Response(status_code=204)


__all__ = ["router"]
