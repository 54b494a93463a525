"""Admin-only activity log endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from ...auth import Identity, require_admin
from ...core import get_session
from ...models import ActivityLog
from ...services import activity_log_to_dict, record_activity
from ..validation import optional_text, require_text

router = APIRouter(prefix="/activity-logs", tags=["activity-logs"])


@router.get("")
def list_activity_logs(
    entity: Optional[str] = None,
    limit: int = 100,
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_admin),
):
    """List activity entries, newest first."""

    query = select(ActivityLog).order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
    if entity:
        query = query.where(ActivityLog.entity == entity)
    entries = session.exec(query.limit(max(1, min(limit, 500)))).all()
    return [activity_log_to_dict(entry) for entry in entries]


@router.get("/{log_id}")
def get_activity_log(
    log_id: int,
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_admin),
):
    entry = session.get(ActivityLog, log_id)
    if not entry:
        raise HTTPException(404, "ActivityLog not found")
    return activity_log_to_dict(entry)


@router.post("", status_code=201)
def create_activity_log(
    body: Dict[str, Any],
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_admin),
):
    """Manually record an entry attributed to the calling admin."""

    entity_id = body.get("entity_id")
    if entity_id is None or str(entity_id).strip() == "":
        raise HTTPException(400, "entity_id is required")

    entry = record_activity(
        session,
        user_id=identity.user_id,
        action=require_text(body, "action", "Action is required"),
        entity=require_text(body, "entity", "Entity is required"),
        entity_id=str(entity_id).strip(),
        details=optional_text(body, "details"),
    )
    session.commit()
    session.refresh(entry)
    return activity_log_to_dict(entry)


__all__ = ["router"]
