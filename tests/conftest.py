"""Pytest configuration shared across the suite."""

from __future__ import annotations

from typing import Iterator

from . import _bootstrap  # noqa: F401

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from taskmanager import models  # noqa: F401
from taskmanager.app import app as fastapi_app
from taskmanager.auth import get_google_client
from taskmanager.core import get_session

from .helpers import DummyGoogleClient


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def app(engine):
    def _get_session() -> Iterator[Session]:
        with Session(engine) as session:
            yield session

    fastapi_app.dependency_overrides[get_session] = _get_session
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def google(app) -> DummyGoogleClient:
    dummy = DummyGoogleClient()
    app.dependency_overrides[get_google_client] = lambda: dummy
    return dummy
