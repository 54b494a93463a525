import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from taskmanager.core import check_database
from taskmanager.core.errors import StorageUnavailable
from taskmanager.services import ensure_admin

from .helpers import api_client


@pytest.mark.anyio
async def test_health_reports_ok(app):
    async with api_client(app) as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "environment": "test"}


@pytest.mark.anyio
async def test_root_banner(app):
    async with api_client(app) as client:
        response = await client.get("/")

    assert response.status_code == 200
    assert "Task Manager API" in response.text


def test_check_database_raises_storage_unavailable(session, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(session, "execute", broken)

    with pytest.raises(StorageUnavailable):
        check_database(session)


def test_ensure_admin_seeds_once(engine):
    with Session(engine) as session:
        first = ensure_admin(
            session, email="root@example.com", password="admin-pass", name="Root"
        )
        second = ensure_admin(
            session, email="ROOT@example.com", password="other-pass", name="Root"
        )

        assert first.role == "admin"
        assert second.id == first.id


def test_ensure_admin_requires_credentials(session):
    assert ensure_admin(session, email=None, password="x", name="Root") is None
