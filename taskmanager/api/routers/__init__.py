"""Aggregate API routers."""

from fastapi import APIRouter

from .activity_logs import router as activity_logs_router
from .auth import router as auth_router
from .projects import router as projects_router
from .system import router as system_router
from .tasks import router as tasks_router
from .users import router as users_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    auth_router,
    tasks_router,
    projects_router,
    users_router,
    activity_logs_router,
)

__all__ = ["ALL_ROUTERS"]
