import threading

import pytest
from authlib.integrations.starlette_client import OAuthError
from sqlmodel import select

from taskmanager.api.routers import auth as auth_routes
from taskmanager.auth import verify_token
from taskmanager.core import GOOGLE_CALLBACK_URL
from taskmanager.models import User

from .helpers import DEFAULT_PASSWORD, api_client, make_user


@pytest.mark.anyio
async def test_register_then_login(app, session):
    async with api_client(app) as client:
        registered = await client.post(
            "/auth/register",
            json={"name": "Ada", "email": "ada@example.com", "password": DEFAULT_PASSWORD},
        )
        login = await client.post(
            "/auth/login",
            json={"email": "ada@example.com", "password": DEFAULT_PASSWORD},
        )

    assert registered.status_code == 201
    body = registered.json()
    assert body["email"] == "ada@example.com"
    assert set(body) == {"id", "email"}

    assert login.status_code == 200
    claims = verify_token(login.json()["token"])
    assert claims.user_id == body["id"]
    assert claims.role.value == "user"


@pytest.mark.anyio
async def test_register_duplicate_email(app, session):
    make_user(session)
    async with api_client(app) as client:
        response = await client.post(
            "/auth/register",
            json={"name": "Again", "email": "ADA@example.com", "password": DEFAULT_PASSWORD},
        )

    assert response.status_code == 400
    assert response.json()["error"] == "duplicate_email"
    assert len(session.exec(select(User)).all()) == 1


@pytest.mark.anyio
@pytest.mark.parametrize(
    "payload",
    [
        {"email": "ada@example.com", "password": DEFAULT_PASSWORD},
        {"name": "Ada", "email": "not-an-email", "password": DEFAULT_PASSWORD},
        {"name": "Ada", "email": "ada@example.com", "password": "short"},
        {"name": "Ada", "email": "ada@example.com"},
    ],
)
async def test_register_validation_errors(app, session, payload):
    async with api_client(app) as client:
        response = await client.post("/auth/register", json=payload)

    assert response.status_code == 400
    assert session.exec(select(User)).all() == []


@pytest.mark.anyio
async def test_login_failures_look_identical(app, session):
    make_user(session)
    async with api_client(app) as client:
        wrong_password = await client.post(
            "/auth/login", json={"email": "ada@example.com", "password": "nope-nope"}
        )
        unknown = await client.post(
            "/auth/login", json={"email": "who@example.com", "password": "nope-nope"}
        )

    assert wrong_password.status_code == unknown.status_code == 401
    assert wrong_password.json() == unknown.json()
    assert unknown.json()["message"] == "Invalid email or password"


@pytest.mark.anyio
async def test_google_start_redirects_with_callback_url(app, google):
    async with api_client(app) as client:
        response = await client.get("/auth/google")

    assert response.status_code == 302
    redirect_uri, kwargs = google.redirects[-1]
    assert redirect_uri == GOOGLE_CALLBACK_URL
    assert kwargs == {"prompt": "select_account"}


@pytest.mark.anyio
async def test_google_callback_creates_user_and_returns_token(app, session, google):
    google.userinfo_payload = {"sub": "g-1", "email": "grace@example.com", "name": "Grace"}

    async with api_client(app) as client:
        first = await client.get("/auth/google/callback", params={"code": "c", "state": "s"})
        second = await client.get("/auth/google/callback", params={"code": "c", "state": "s"})

    assert first.status_code == 200
    body = first.json()
    assert body["user"]["email"] == "grace@example.com"
    assert body["user"]["name"] == "Grace"
    assert verify_token(body["token"]).user_id == body["user"]["id"]

    assert second.json()["user"]["id"] == body["user"]["id"]
    users = session.exec(select(User)).all()
    assert len(users) == 1
    assert users[0].password_hash is None


@pytest.mark.anyio
async def test_google_callback_links_password_account(app, session, google):
    existing = make_user(session, "grace@example.com", name="Grace")
    google.userinfo_payload = {"sub": "g-1", "email": "grace@example.com", "name": "G"}

    async with api_client(app) as client:
        response = await client.get("/auth/google/callback")

    assert response.status_code == 200
    assert response.json()["user"]["id"] == str(existing.id)
    session.refresh(existing)
    assert existing.provider_sub == "g-1"


@pytest.mark.anyio
async def test_google_callback_provider_error(app, session, google):
    google.error = OAuthError(error="access_denied", description="User cancelled")

    async with api_client(app) as client:
        response = await client.get("/auth/google/callback", params={"error": "access_denied"})

    assert response.status_code == 401
    assert response.json()["message"] == "OAuth login failed"
    assert session.exec(select(User)).all() == []


@pytest.mark.anyio
async def test_google_callback_incomplete_profile(app, session, google):
    google.userinfo_payload = {"sub": "g-1"}

    async with api_client(app) as client:
        response = await client.get("/auth/google/callback")

    assert response.status_code == 401
    assert session.exec(select(User)).all() == []


@pytest.mark.anyio
async def test_failure_route(app):
    async with api_client(app) as client:
        response = await client.get("/auth/failure")

    assert response.status_code == 401
    assert response.json() == {"message": "OAuth login failed"}


@pytest.mark.anyio
async def test_google_callback_resolves_account_off_the_event_loop(
    app, google, monkeypatch
):
    google.userinfo_payload = {"sub": "g-7", "email": "lin@example.com", "name": "Lin"}
    loop_thread = threading.get_ident()
    resolver_threads = []
    original = auth_routes.resolve_oauth_user

    def recording_resolve(session, profile):
        resolver_threads.append(threading.get_ident())
        return original(session, profile)

    monkeypatch.setattr(auth_routes, "resolve_oauth_user", recording_resolve)

    async with api_client(app) as client:
        response = await client.get("/auth/google/callback")

    assert response.status_code == 200
    assert len(resolver_threads) == 1
    assert resolver_threads[0] != loop_thread
