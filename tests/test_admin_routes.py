import uuid

import pytest
from sqlmodel import select

from taskmanager.models import ActivityLog, Role, User

from .helpers import api_client, bearer, make_user


@pytest.mark.anyio
async def test_user_listing_is_admin_only_and_hides_hashes(app, session):
    user = make_user(session)
    admin = make_user(session, "root@example.com", role=Role.ADMIN)

    async with api_client(app) as client:
        denied = await client.get("/users", headers=bearer(user))
        listed = await client.get("/users", headers=bearer(admin))

    assert denied.status_code == 403
    assert listed.status_code == 200
    emails = {entry["email"] for entry in listed.json()}
    assert emails == {"ada@example.com", "root@example.com"}
    assert all("password_hash" not in entry for entry in listed.json())


@pytest.mark.anyio
async def test_user_can_rename_self_but_not_change_role(app, session):
    user = make_user(session)
    headers = bearer(user)

    async with api_client(app) as client:
        renamed = await client.put(f"/users/{user.id}", json={"name": "Ada L"}, headers=headers)
        escalate = await client.put(f"/users/{user.id}", json={"role": "admin"}, headers=headers)

    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Ada L"
    assert escalate.status_code == 403
    session.refresh(user)
    assert user.role == "user"


@pytest.mark.anyio
async def test_user_cannot_read_someone_else(app, session):
    user = make_user(session)
    other = make_user(session, "bob@example.com", name="Bob")

    async with api_client(app) as client:
        response = await client.get(f"/users/{other.id}", headers=bearer(user))

    assert response.status_code == 403


@pytest.mark.anyio
async def test_admin_promotes_and_deletes_users(app, session):
    user = make_user(session)
    admin = make_user(session, "root@example.com", role=Role.ADMIN)
    user_id = user.id

    async with api_client(app) as client:
        promoted = await client.put(
            f"/users/{user_id}", json={"role": "admin"}, headers=bearer(admin)
        )
        deleted = await client.delete(f"/users/{user_id}", headers=bearer(admin))
        gone = await client.get(f"/users/{user_id}", headers=bearer(admin))
        bad_id = await client.get("/users/not-a-uuid", headers=bearer(admin))

    assert promoted.json()["role"] == "admin"
    assert deleted.json() == {"message": "User deleted"}
    assert gone.status_code == 404
    assert bad_id.status_code == 400
    session.expire_all()
    assert session.get(User, user_id) is None


@pytest.mark.anyio
async def test_admin_cannot_delete_self(app, session):
    admin = make_user(session, "root@example.com", role=Role.ADMIN)
    async with api_client(app) as client:
        response = await client.delete(f"/users/{admin.id}", headers=bearer(admin))

    assert response.status_code == 400


@pytest.mark.anyio
async def test_activity_log_manual_entries(app, session):
    admin = make_user(session, "root@example.com", role=Role.ADMIN)
    headers = bearer(admin)
    entity_id = str(uuid.uuid4())

    async with api_client(app) as client:
        created = await client.post(
            "/activity-logs",
            json={"action": "Audited", "entity": "Project", "entity_id": entity_id},
            headers=headers,
        )
        fetched = await client.get(f"/activity-logs/{created.json()['id']}", headers=headers)
        filtered = await client.get("/activity-logs", params={"entity": "Task"}, headers=headers)
        invalid = await client.post(
            "/activity-logs", json={"action": "Audited", "entity": "Project"}, headers=headers
        )
        missing = await client.get("/activity-logs/9999", headers=headers)

    assert created.status_code == 201
    assert fetched.json()["user_id"] == str(admin.id)
    assert fetched.json()["entity_id"] == entity_id
    assert filtered.json() == []
    assert invalid.status_code == 400
    assert missing.status_code == 404
    assert len(session.exec(select(ActivityLog)).all()) == 1
