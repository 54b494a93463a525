"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
from starlette.middleware.sessions import SessionMiddleware

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_api
from .core import (
    ADMIN_EMAIL,
    ADMIN_NAME,
    ADMIN_PASSWORD,
    ALLOWED_CORS_ORIGINS,
    APP_ENV,
    AppEnvironment,
    GOOGLE_CALLBACK_URL,
    LOG_LEVEL,
    SESSION_SECRET,
    engine,
    init_db,
)
from .core.logging import configure_logging
from .services import ensure_admin

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    with Session(engine) as session:
        ensure_admin(session, email=ADMIN_EMAIL, password=ADMIN_PASSWORD, name=ADMIN_NAME)
    logger.info(
        "Task Manager API started (env=%s, google_callback=%s)",
        APP_ENV.value,
        GOOGLE_CALLBACK_URL,
    )
    yield


def create_app() -> FastAPI:
    configure_logging(LOG_LEVEL)
    app = FastAPI(title="Task Manager API", version="1.0.0", lifespan=lifespan)

    wildcard = ALLOWED_CORS_ORIGINS == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=not wildcard,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=SESSION_SECRET,
        session_cookie="oauth_state",
        https_only=APP_ENV is AppEnvironment.PRODUCTION,
        same_site="lax",
    )

    register_api(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("taskmanager.app:app", host="127.0.0.1", port=8080, reload=True)
