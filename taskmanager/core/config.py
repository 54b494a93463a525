"""Application settings and environment helpers."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional

from dotenv import load_dotenv

load_dotenv(override=False)

GOOGLE_CALLBACK_PATH = "/auth/google/callback"


class AppEnvironment(str, Enum):
    """Deployment environments the service knows how to configure."""

    LOCAL = "local"
    TEST = "test"
    PRODUCTION = "production"


def _require_env(name: str) -> str:
    """Return a required environment variable or raise an error."""

    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def parse_environment(raw: str | None) -> AppEnvironment:
    """Map an ``APP_ENV`` value onto a known environment."""

    value = (raw or AppEnvironment.LOCAL.value).strip().lower()
    aliases = {"development": "local", "dev": "local", "prod": "production"}
    value = aliases.get(value, value)
    try:
        return AppEnvironment(value)
    except ValueError as exc:
        choices = ", ".join(env.value for env in AppEnvironment)
        raise RuntimeError(f"APP_ENV must be one of: {choices}") from exc


def resolve_callback_url(
    environment: AppEnvironment,
    *,
    local_base_url: str,
    public_base_url: Optional[str] = None,
    explicit_url: Optional[str] = None,
    path: str = GOOGLE_CALLBACK_PATH,
) -> str:
    """Return the one OAuth callback URL for ``environment``.

    An explicit URL always wins. Production builds the URL from the public
    base URL and refuses to fall back to a local address; local and test
    environments use the local base URL.
    """

    if explicit_url:
        return explicit_url.strip()

    if environment is AppEnvironment.PRODUCTION:
        if not public_base_url:
            raise ValueError(
                "PUBLIC_BASE_URL or GOOGLE_CALLBACK_URL is required in production"
            )
        base = public_base_url
    else:
        base = local_base_url

    return f"{base.strip().rstrip('/')}/{path.lstrip('/')}"


# Runtime environment ---------------------------------------------------------
APP_ENV = parse_environment(os.getenv("APP_ENV"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


# Token signing ---------------------------------------------------------------
JWT_SECRET = _require_env("JWT_SECRET")
JWT_ALGORITHM = "HS256"
TOKEN_TTL_SECONDS = 3600

# authlib keeps the OAuth state in the signed session cookie.
SESSION_SECRET = os.getenv("SESSION_SECRET") or JWT_SECRET

BCRYPT_ROUNDS = _env_int("BCRYPT_ROUNDS", 10)


# Google OAuth ----------------------------------------------------------------
GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID") or None
GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET") or None
LOCAL_BASE_URL = os.getenv("LOCAL_BASE_URL", "http://localhost:8080")
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL") or None

try:
    GOOGLE_CALLBACK_URL = resolve_callback_url(
        APP_ENV,
        local_base_url=LOCAL_BASE_URL,
        public_base_url=PUBLIC_BASE_URL,
        explicit_url=os.getenv("GOOGLE_CALLBACK_URL"),
    )
except ValueError as exc:
    raise RuntimeError(str(exc)) from exc


# Storage ---------------------------------------------------------------------
DATABASE_URL = os.getenv("DATABASE_URL") or None
DB_RESET = _env_bool("DB_RESET", False)


# HTTP ------------------------------------------------------------------------
_cors_origins = _split_csv(os.getenv("CORS_ORIGINS"))
ALLOWED_CORS_ORIGINS = _unique(_cors_origins) or ["*"]


# Bootstrap admin -------------------------------------------------------------
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL") or None
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD") or None
ADMIN_NAME = os.getenv("ADMIN_NAME", "Administrator")

DATA_DIR = Path(os.getenv("DATA_DIR", "data"))


__all__ = [
    "ADMIN_EMAIL",
    "ADMIN_NAME",
    "ADMIN_PASSWORD",
    "ALLOWED_CORS_ORIGINS",
    "APP_ENV",
    "AppEnvironment",
    "BCRYPT_ROUNDS",
    "DATABASE_URL",
    "DATA_DIR",
    "DB_RESET",
    "GOOGLE_CALLBACK_PATH",
    "GOOGLE_CALLBACK_URL",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "JWT_ALGORITHM",
    "JWT_SECRET",
    "LOCAL_BASE_URL",
    "LOG_LEVEL",
    "PUBLIC_BASE_URL",
    "SESSION_SECRET",
    "TOKEN_TTL_SECONDS",
    "parse_environment",
    "resolve_callback_url",
]
