"""Application error taxonomy and its HTTP rendering."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto a fixed HTTP response."""

    status_code = 500
    code = "server_error"
    message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidCredentials(AppError):
    """Email unknown, account has no password, or password mismatch."""

    status_code = 401
    code = "invalid_credentials"
    message = "Invalid email or password"


class DuplicateEmail(AppError):
    status_code = 400
    code = "duplicate_email"
    message = "Email already registered"


class TokenMissing(AppError):
    status_code = 401
    code = "missing"
    message = "Access denied. No token provided."


class TokenExpired(AppError):
    status_code = 401
    code = "expired"
    message = "Token expired. Please log in again."


class TokenInvalid(AppError):
    status_code = 401
    code = "invalid"
    message = "Invalid or malformed token."


class Forbidden(AppError):
    status_code = 403
    code = "forbidden"
    message = "Access denied. Admins only."


class OAuthFailed(AppError):
    status_code = 401
    code = "oauth_failed"
    message = "OAuth login failed"


class StorageUnavailable(AppError):
    """The database could not be reached; rendered as a generic 500."""


def _error_body(exc: AppError) -> dict:
    return {"success": False, "message": exc.message, "error": exc.code}


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(_error_body(exc), status_code=exc.status_code)


async def handle_storage_error(request: Request, exc: OperationalError) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(_error_body(StorageUnavailable()), status_code=500)


async def handle_http_error(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    try:
        code = HTTPStatus(exc.status_code).phrase.lower().replace(" ", "_")
    except ValueError:
        code = "http_error"
    return JSONResponse(
        {"success": False, "message": str(exc.detail), "error": code},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        {
            "success": False,
            "message": "Validation failed",
            "error": "validation_failed",
            "errors": jsonable_encoder(exc.errors()),
        },
        status_code=400,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the taxonomy handlers to ``app``."""

    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(OperationalError, handle_storage_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)


__all__ = [
    "AppError",
    "DuplicateEmail",
    "Forbidden",
    "InvalidCredentials",
    "OAuthFailed",
    "StorageUnavailable",
    "TokenExpired",
    "TokenInvalid",
    "TokenMissing",
    "register_error_handlers",
]
