"""
Password hashing, registration, and email/password authentication.

Every authentication attempt performs exactly one bcrypt comparison. Unknown
emails and OAuth-only accounts are checked against a throwaway hash so the
response time does not reveal whether an account exists.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.config import BCRYPT_ROUNDS
from ..core.errors import DuplicateEmail, InvalidCredentials
from ..models import Role, User

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6
# bcrypt only looks at the first 72 bytes and newer releases reject longer input.
PASSWORD_MAX_BYTES = 72

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email or ""))


def validate_password(password: str) -> Optional[str]:
    """Return an error message when ``password`` is unusable, else ``None``."""

    if len(password or "") < PASSWORD_MIN_LENGTH:
        return f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        return f"Password must be at most {PASSWORD_MAX_BYTES} bytes"
    return None


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a password using bcrypt with a fresh salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


# Computed once at import.
_DUMMY_HASH = hash_password("timing-equalizer-not-a-password")


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == normalize_email(email))).first()


def register_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: Role = Role.USER,
) -> User:
    """Create a password account, raising ``DuplicateEmail`` if the email is taken."""

    normalized = normalize_email(email)
    if get_user_by_email(session, normalized):
        raise DuplicateEmail()

    user = User(
        name=name.strip(),
        email=normalized,
        password_hash=hash_password(password),
        role=role.value,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration for the same email.
        session.rollback()
        raise DuplicateEmail() from exc
    session.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def authenticate(session: Session, *, email: str, password: str) -> User:
    """Return the user owning ``email`` when ``password`` matches."""

    user = get_user_by_email(session, email)
    stored_hash = user.password_hash if user else None

    matched = verify_password(password, stored_hash or _DUMMY_HASH)
    if user is None or stored_hash is None or not matched:
        logger.info("Failed login attempt")
        raise InvalidCredentials()
    return user


__all__ = [
    "PASSWORD_MAX_BYTES",
    "PASSWORD_MIN_LENGTH",
    "authenticate",
    "get_user_by_email",
    "hash_password",
    "is_valid_email",
    "normalize_email",
    "register_user",
    "validate_password",
    "verify_password",
]
