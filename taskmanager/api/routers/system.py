"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlmodel import Session

from ...core import APP_ENV, check_database, get_session

router = APIRouter(tags=["system"])


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Task Manager API running. Visit /docs for Swagger UI."


@router.get("/health")
def health(session: Session = Depends(get_session)) -> Dict[str, Any]:
    """Readiness probe; fails with a 500 when the database is unreachable."""

    check_database(session)
    return {"ok": True, "environment": APP_ENV.value}


__all__ = ["router"]
