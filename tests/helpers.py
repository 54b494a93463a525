"""Shared builders for the test suite."""

from __future__ import annotations

from . import _bootstrap  # noqa: F401

from typing import Optional

import httpx
from fastapi.responses import RedirectResponse
from sqlmodel import Session

from taskmanager.auth import issue_token, register_user
from taskmanager.models import Role, User

DEFAULT_PASSWORD = "correct-horse"


class DummyGoogleClient:
    """Stands in for the authlib Google client."""

    def __init__(self) -> None:
        self.redirects: list[tuple[str, dict]] = []
        self.userinfo_payload: Optional[dict] = None
        self.error: Optional[Exception] = None

    async def authorize_redirect(self, request, redirect_uri, **kwargs):
        self.redirects.append((redirect_uri, kwargs))
        return RedirectResponse(
            f"https://accounts.example.com/o/oauth2/auth?redirect_uri={redirect_uri}",
            status_code=302,
        )

    async def authorize_access_token(self, request):
        if self.error is not None:
            raise self.error
        return {"access_token": "provider-access-token", "token_type": "Bearer"}

    async def userinfo(self, token=None, **kwargs):
        return self.userinfo_payload


def api_client(app) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver"
    )


def make_user(
    session: Session,
    email: str = "ada@example.com",
    *,
    name: str = "Ada",
    role: Role = Role.USER,
    password: str = DEFAULT_PASSWORD,
) -> User:
    return register_user(session, name=name, email=email, password=password, role=role)


def bearer(user: User, **kwargs) -> dict[str, str]:
    return {"Authorization": f"Bearer {issue_token(user, **kwargs)}"}
