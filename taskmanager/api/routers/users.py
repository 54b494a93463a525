"""User administration endpoints."""

from __future__ import annotations

import uuid
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from ...auth import Identity, require_admin, require_identity
from ...core import get_session
from ...core.errors import Forbidden
from ...models import Role, User
from ...services import record_activity, user_to_dict
from ..validation import require_text

router = APIRouter(prefix="/users", tags=["users"])


def _get_user(session: Session, user_id: uuid.UUID) -> User:
    user = session.get(User, user_id)
    if not user:
        raise HTTPException(404, "User not found")
    return user


def _check_self_or_admin(identity: Identity, user_id: uuid.UUID) -> None:
    if not identity.is_admin and identity.uuid != user_id:
        raise Forbidden("Access denied. You can only access your own account.")


@router.get("")
def list_users(
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_admin),
):
    users = session.exec(select(User).order_by(User.created_at)).all()
    return [user_to_dict(user) for user in users]


@router.get("/{user_id}")
def get_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_identity),
):
    _check_self_or_admin(identity, user_id)
    return user_to_dict(_get_user(session, user_id))


@router.put("/{user_id}")
def update_user(
    user_id: uuid.UUID,
    body: Dict[str, Any],
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_identity),
):
    """Rename an account; only admins may change roles.

    A role change applies to tokens issued afterwards. Tokens already held by
    the user keep their old role until they expire.
    """

    _check_self_or_admin(identity, user_id)
    user = _get_user(session, user_id)

    changes: List[str] = []
    if "name" in body:
        name = require_text(body, "name", "Name is required")
        if len(name) < 2:
            raise HTTPException(400, "Name must be at least 2 characters")
        if name != user.name:
            changes.append(f"name: {user.name} -> {name}")
            user.name = name
    if "role" in body:
        if not identity.is_admin:
            raise Forbidden()
        try:
            role = Role(body["role"])
        except ValueError as exc:
            raise HTTPException(400, "invalid role") from exc
        if role.value != user.role:
            changes.append(f"role: {user.role} -> {role.value}")
            user.role = role.value

    if changes:
        session.add(user)
        record_activity(
            session,
            user_id=identity.user_id,
            action="Updated User",
            entity="User",
            entity_id=user.id,
            details="; ".join(changes),
        )
        session.commit()
        session.refresh(user)
    return user_to_dict(user)


@router.delete("/{user_id}")
def delete_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
    identity: Identity = Depends(require_admin),
):
    """Delete an account. Outstanding tokens stay valid until they expire."""

    if identity.uuid == user_id:
        raise HTTPException(400, "Cannot delete your own account")
    user = _get_user(session, user_id)

    session.delete(user)
    record_activity(
        session,
        user_id=identity.user_id,
        action="Deleted User",
        entity="User",
        entity_id=user_id,
        details=user.email,
    )
    session.commit()
    return {"message": "User deleted"}


__all__ = ["router"]
