"""Password and Google OAuth authentication routes."""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx
from authlib.integrations.starlette_client import OAuthError
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from sqlmodel import Session

from ...auth import (
    ExternalProfile,
    Identity,
    authenticate,
    get_google_client,
    google_configured,
    issue_token,
    register_user,
    require_identity,
    resolve_oauth_user,
)
from ...auth.passwords import is_valid_email, validate_password
from ...core import GOOGLE_CALLBACK_URL, get_session
from ...core.errors import OAuthFailed
from ..validation import require_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201)
def register(body: Dict[str, Any], session: Session = Depends(get_session)):
    """Register a new password account."""

    name = require_text(body, "name", "Name is required")
    email = body.get("email")
    password = body.get("password")
    if not isinstance(email, str) or not is_valid_email(email.strip()):
        raise HTTPException(400, "Valid email is required")
    if not isinstance(password, str):
        raise HTTPException(400, "Password is required")
    problem = validate_password(password)
    if problem:
        raise HTTPException(400, problem)

    user = register_user(session, name=name, email=email, password=password)
    return {"id": str(user.id), "email": user.email}


@router.post("/login")
def login(body: Dict[str, Any], session: Session = Depends(get_session)):
    """Exchange an email and password for a bearer token."""

    email = body.get("email")
    password = body.get("password")
    if not isinstance(email, str) or not is_valid_email(email.strip()):
        raise HTTPException(400, "Valid email is required")
    if not isinstance(password, str) or not password:
        raise HTTPException(400, "Password is required")

    user = authenticate(session, email=email, password=password)
    return {"token": issue_token(user)}


@router.get("/google")
async def auth_google_start(request: Request, client=Depends(get_google_client)):
    if not google_configured():
        raise HTTPException(
            status_code=500,
            detail="Google OAuth not configured. Check GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET.",
        )

    logger.debug("Starting Google OAuth with callback %s", GOOGLE_CALLBACK_URL)
    return await client.authorize_redirect(
        request, GOOGLE_CALLBACK_URL, prompt="select_account"
    )


@router.get("/google/callback")
async def auth_google_callback(
    request: Request,
    session: Session = Depends(get_session),
    client=Depends(get_google_client),
):
    try:
        token = await client.authorize_access_token(request)
        userinfo = token.get("userinfo") or await client.userinfo(token=token)
    except (OAuthError, httpx.HTTPError) as exc:
        logger.warning("Google OAuth callback failed: %s", exc)
        raise OAuthFailed() from exc

    profile = ExternalProfile.from_userinfo(userinfo)
    # Account resolution does blocking database writes.
    user = await run_in_threadpool(resolve_oauth_user, session, profile)
    return {
        "token": issue_token(user),
        "user": {"id": str(user.id), "name": user.name, "email": user.email},
    }


@router.get("/failure")
def auth_failure():
    return JSONResponse({"message": OAuthFailed.message}, status_code=401)


@router.get("/me")
def me(identity: Identity = Depends(require_identity)):
    """Echo the identity carried by the caller's token."""

    return {"id": identity.user_id, "role": identity.role.value}


__all__ = ["router"]
