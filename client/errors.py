from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    UNAUTHORIZED = "unauthorized"
    CONFLICT = "conflict"
    UNREACHABLE = "unreachable"
    SERVER = "server"


_STATUS_KINDS = {
    400: ErrorKind.INVALID_STATE,
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.UNAUTHORIZED,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
    422: ErrorKind.INVALID_STATE,
}


def kind_for_status(status_code: int) -> ErrorKind:
    return _STATUS_KINDS.get(status_code, ErrorKind.SERVER)


def error_message(body: Any, fallback: str) -> str:
    """Pull a readable message out of a FastAPI error body."""
    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, str):
            return detail
        if isinstance(detail, list) and detail:
            # Validation errors: [{"loc": [...], "msg": "..."}]
            return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail)
        if isinstance(body.get("message"), str):
            return body["message"]
    return fallback
