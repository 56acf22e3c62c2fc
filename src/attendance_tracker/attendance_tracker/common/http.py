from __future__ import annotations

from flask import request


def json_object() -> dict:
    """Request body as a JSON object; anything else (missing, array, scalar) reads as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
