"""Request body field helpers shared by the routers."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from fastapi import HTTPException

from ..core.time import parse_datetime


def require_text(body: Dict[str, Any], key: str, message: str) -> str:
    value = body.get(key)
    if not isinstance(value, str) or not value.strip():
        raise HTTPException(400, message)
    return value.strip()


def optional_text(body: Dict[str, Any], key: str, default: str = "") -> str:
    value = body.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise HTTPException(400, f"{key} must be a string")
    return value.strip()


def choice(
    body: Dict[str, Any], key: str, allowed: Sequence[str], default: str
) -> str:
    value = body.get(key)
    if value is None:
        return default
    if value not in allowed:
        raise HTTPException(400, f"invalid {key}")
    return value


def optional_datetime(body: Dict[str, Any], key: str) -> Optional[datetime]:
    value = body.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise HTTPException(400, f"{key} must be a valid date")
    try:
        return parse_datetime(value)
    except ValueError as exc:
        raise HTTPException(400, f"{key} must be a valid date") from exc


def optional_int(body: Dict[str, Any], key: str) -> Optional[int]:
    value = body.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise HTTPException(400, f"{key} must be an integer")
    return value


def string_list(body: Dict[str, Any], key: str) -> List[str]:
    value = body.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or any(not isinstance(item, str) for item in value):
        raise HTTPException(400, f"{key} must be a list of strings")
    return [item.strip() for item in value if item.strip()]


def uuid_list(body: Dict[str, Any], key: str) -> List[str]:
    values = string_list(body, key)
    try:
        return [str(uuid.UUID(item)) for item in values]
    except ValueError as exc:
        raise HTTPException(400, f"{key} must contain user ids") from exc


__all__ = [
    "choice",
    "optional_datetime",
    "optional_int",
    "optional_text",
    "require_text",
    "string_list",
    "uuid_list",
]
