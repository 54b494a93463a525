"""Task management endpoints."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session, select

from ...auth import Identity, require_identity
from ...core import get_session, utcnow
from ...core.errors import Forbidden
from ...models import TASK_PRIORITIES, TASK_STATUSES, Project, Task
from ...services import record_activity, tags_from_task, task_to_dict
from ..validation import (
    choice,
    optional_datetime,
    optional_int,
    optional_text,
    require_text,
    string_list,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _get_task(session: Session, task_id: int) -> Task:
    task = session.get(Task, task_id)
    if not task:
        raise HTTPException(404, "Task not found")
    return task


def _check_project(session: Session, project_id: Optional[int]) -> None:
    if project_id is not None and not session.get(Project, project_id):
        raise HTTPException(400, "Project not found")


def _check_owner(task: Task, identity: Identity) -> None:
    if identity.is_admin or task.owner_id is None:
        return
    if task.owner_id != identity.uuid:
        raise Forbidden("Access denied. Only the task owner can change it.")


@router.get("")
def list_tasks(
    status: Optional[str] = None,
    project_id: Optional[int] = None,
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_identity),
):
    """List tasks, newest first."""

    query = select(Task).order_by(Task.created_at.desc())
    if status:
        query = query.where(Task.status == status)
    if project_id is not None:
        query = query.where(Task.project_id == project_id)
    return [task_to_dict(task) for task in session.exec(query).all()]


@router.get("/{task_id}")
def get_task(
    task_id: int,
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_identity),
):
    return task_to_dict(_get_task(session, task_id))


@router.post("", status_code=201)
def create_task(
    body: Dict[str, Any],
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_identity),
):
    """Create a task owned by the caller."""

    project_id = optional_int(body, "project_id")
    _check_project(session, project_id)

    task = Task(
        title=require_text(body, "title", "title is required"),
        description=optional_text(body, "description"),
        priority=choice(body, "priority", TASK_PRIORITIES, "Low"),
        status=choice(body, "status", TASK_STATUSES, "Pending"),
        due_date=optional_datetime(body, "due_date"),
        owner_id=identity.uuid,
        project_id=project_id,
        tags_json=json.dumps(string_list(body, "tags")),
    )
    session.add(task)
    session.flush()
    record_activity(
        session,
        user_id=identity.user_id,
        action="Created Task",
        entity="Task",
        entity_id=task.id,
        details=task.title,
    )
    session.commit()
    session.refresh(task)
    return task_to_dict(task)


@router.put("/{task_id}")
def update_task(
    task_id: int,
    body: Dict[str, Any],
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_identity),
):
    """Apply the fields present in ``body`` to a task."""

    task = _get_task(session, task_id)
    _check_owner(task, identity)

    changes: List[str] = []

    def _apply(field: str, value: Any) -> None:
        old = getattr(task, field)
        if old != value:
            changes.append(f"{field}: {old} -> {value}")
            setattr(task, field, value)

    if "title" in body:
        _apply("title", require_text(body, "title", "title is required"))
    if "description" in body:
        _apply("description", optional_text(body, "description"))
    if "priority" in body:
        _apply("priority", choice(body, "priority", TASK_PRIORITIES, task.priority))
    if "status" in body:
        _apply("status", choice(body, "status", TASK_STATUSES, task.status))
    if "due_date" in body:
        _apply("due_date", optional_datetime(body, "due_date"))
    if "project_id" in body:
        project_id = optional_int(body, "project_id")
        _check_project(session, project_id)
        _apply("project_id", project_id)
    if "tags" in body:
        tags = string_list(body, "tags")
        if tags != tags_from_task(task):
            changes.append("tags updated")
            task.tags_json = json.dumps(tags)

    if changes:
        task.updated_at = utcnow()
        session.add(task)
        record_activity(
            session,
            user_id=identity.user_id,
            action="Updated Task",
            entity="Task",
            entity_id=task.id,
            details="; ".join(changes),
        )
        session.commit()
        session.refresh(task)
    return task_to_dict(task)


@router.delete("/{task_id}", status_code=204)
def delete_task(
    task_id: int,
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_identity),
):
    task = _get_task(session, task_id)
    _check_owner(task, identity)

    session.delete(task)
    record_activity(
        session,
        user_id=identity.user_id,
        action="Deleted Task",
        entity="Task",
        entity_id=task_id,
        details=task.title,
    )
    session.commit()
    return Response(status_code=204)


__all__ = ["router"]
