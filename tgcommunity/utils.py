from datetime import datetime, timezone
from typing import Any

from flask import request

from .errors import ValidationError
from .routes.log_routes import log


def err(msg: str, code: int = 400):
    """Return error JSON and write it to the log."""
    log(f"{code} {msg}", 'ERROR' if code >= 500 else 'WARN')
    return {"error": msg}, code


def now_iso() -> str:
    """UTC timestamp like JavaScript's Date.toISOString(): 2025-01-31T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


# SQLite INTEGER is a signed 64-bit value
MIN_ID = -2 ** 63
MAX_ID = 2 ** 63 - 1


def in_id_range(value: int) -> bool:
    return MIN_ID <= value <= MAX_ID


def parse_int(value: Any, message: str) -> int:
    """Accepts ints and digit strings (JSON clients send both); bools and values outside 64 bits are rejected."""
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError(message) from None
    if isinstance(value, int) and in_id_range(value):
        return value
    raise ValidationError(message)


def json_body() -> dict:
    """Request JSON that must be an object; anything else is a 400."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()
