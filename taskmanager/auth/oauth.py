"""Google OAuth client registration and account resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from authlib.integrations.starlette_client import OAuth
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.config import GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET
from ..core.errors import OAuthFailed
from ..models import Role, User
from .passwords import normalize_email

logger = logging.getLogger(__name__)

GOOGLE_PROVIDER = "google"
GOOGLE_SCOPE = "profile email"
GOOGLE_METADATA_URL = "https://accounts.google.com/.well-known/openid-configuration"

# Racing writers can beat us at most once per step (link, insert).
_RESOLVE_ATTEMPTS = 3

oauth_registry = OAuth()
oauth_registry.register(
    name=GOOGLE_PROVIDER,
    client_id=GOOGLE_CLIENT_ID or "unconfigured",
    client_secret=GOOGLE_CLIENT_SECRET or "unconfigured",
    server_metadata_url=GOOGLE_METADATA_URL,
    client_kwargs={"scope": GOOGLE_SCOPE},
)


def google_configured() -> bool:
    return bool(GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET)


def get_google_client():
    """FastAPI dependency returning the registered Google client."""

    return oauth_registry.google


@dataclass(frozen=True)
class ExternalProfile:
    """Identity asserted by an OAuth provider."""

    provider: str
    subject: str
    email: str
    name: str

    @classmethod
    def from_userinfo(
        cls, userinfo: Mapping[str, Any], provider: str = GOOGLE_PROVIDER
    ) -> "ExternalProfile":
        subject = str(userinfo.get("sub") or "").strip()
        email = normalize_email(userinfo.get("email") or "")
        if not subject or not email:
            raise OAuthFailed()
        name = (userinfo.get("name") or "").strip() or email.split("@")[0]
        return cls(provider=provider, subject=subject, email=email, name=name)


def _find_by_identity(session: Session, profile: ExternalProfile) -> Optional[User]:
    return session.exec(
        select(User).where(
            User.provider == profile.provider,
            User.provider_sub == profile.subject,
        )
    ).first()


def _link_by_email(session: Session, profile: ExternalProfile) -> bool:
    """Attach the provider identity to an unlinked account with the same email.

    A single conditional UPDATE, so two callbacks racing for the same email
    cannot both apply the link.
    """

    result = session.execute(
        update(User)
        .where(User.email == profile.email, User.provider_sub.is_(None))
        .values(provider=profile.provider, provider_sub=profile.subject)
    )
    session.commit()
    return result.rowcount == 1


def _find_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == email)).first()


def resolve_oauth_user(session: Session, profile: ExternalProfile) -> User:
    """Find, link, or create the local account for ``profile``."""

    for _ in range(_RESOLVE_ATTEMPTS):
        user = _find_by_identity(session, profile)
        if user:
            return user

        try:
            linked = _link_by_email(session, profile)
        except IntegrityError:
            session.rollback()
            continue
        if linked:
            logger.info("Linked %s identity to existing account", profile.provider)
            continue

        owner = _find_by_email(session, profile.email)
        if owner is not None:
            if owner.provider == profile.provider and owner.provider_sub == profile.subject:
                return owner
            # Email belongs to an account already tied to another identity.
            logger.warning("Refusing %s login: email linked elsewhere", profile.provider)
            raise OAuthFailed()

        user = User(
            name=profile.name,
            email=profile.email,
            role=Role.USER.value,
            provider=profile.provider,
            provider_sub=profile.subject,
        )
        session.add(user)
        try:
            session.commit()
        except IntegrityError:
            # A concurrent callback created or linked the account first.
            session.rollback()
            continue
        session.refresh(user)
        logger.info("Created account %s from %s login", user.id, profile.provider)
        return user

    user = _find_by_identity(session, profile)
    if user:
        return user
    raise OAuthFailed()


__all__ = [
    "ExternalProfile",
    "GOOGLE_PROVIDER",
    "GOOGLE_SCOPE",
    "get_google_client",
    "google_configured",
    "oauth_registry",
    "resolve_oauth_user",
]
