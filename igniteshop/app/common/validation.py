from __future__ import annotations

from typing import Any, Dict
from flask import request

from igniteshop.app.common.errors import abort_json


def get_json() -> Dict[str, Any]:
    if not request.is_json:
        abort_json(400, "invalid_json", "Request must be application/json")
    data = request.get_json(silent=True)
    if data is None or not isinstance(data, dict):
        abort_json(400, "invalid_json", "Malformed JSON body")
    return data


def require_string(data: Dict[str, Any], field: str, message: str) -> str:
    """Return a non-empty string field or abort with `message`."""
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        abort_json(400, "validation_error", message, {"missing": [field]})
    return value.strip()
