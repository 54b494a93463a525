"""Core configuration and infrastructure helpers."""

from .config import (
    ADMIN_EMAIL,
    ADMIN_NAME,
    ADMIN_PASSWORD,
    ALLOWED_CORS_ORIGINS,
    APP_ENV,
    BCRYPT_ROUNDS,
    DB_RESET,
    GOOGLE_CALLBACK_URL,
    GOOGLE_CLIENT_ID,
    GOOGLE_CLIENT_SECRET,
    JWT_ALGORITHM,
    JWT_SECRET,
    LOG_LEVEL,
    SESSION_SECRET,
    TOKEN_TTL_SECONDS,
    AppEnvironment,
)
from .database import check_database, engine, get_session, init_db
from .time import isoformat, parse_datetime, utcnow

__all__ = [
    "ADMIN_EMAIL",
    "ADMIN_NAME",
    "ADMIN_PASSWORD",
    "ALLOWED_CORS_ORIGINS",
    "APP_ENV",
    "AppEnvironment",
    "BCRYPT_ROUNDS",
    "DB_RESET",
    "GOOGLE_CALLBACK_URL",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "JWT_ALGORITHM",
    "JWT_SECRET",
    "LOG_LEVEL",
    "SESSION_SECRET",
    "TOKEN_TTL_SECONDS",
    "check_database",
    "engine",
    "get_session",
    "init_db",
    "isoformat",
    "parse_datetime",
    "utcnow",
]
