"""Test helper that sets environment defaults before the app is imported."""

from __future__ import annotations

import os

_DEFAULT_ENV_VARS: dict[str, str] = {
    "APP_ENV": "test",
    "JWT_SECRET": "test-jwt-secret-that-is-long-enough-for-hs256",
    "GOOGLE_CLIENT_ID": "test-client-id",
    "GOOGLE_CLIENT_SECRET": "test-client-secret",
    "DATABASE_URL": "sqlite://",
    "BCRYPT_ROUNDS": "4",
    "LOG_LEVEL": "WARNING",
}

for key, value in _DEFAULT_ENV_VARS.items():
    os.environ.setdefault(key, value)
