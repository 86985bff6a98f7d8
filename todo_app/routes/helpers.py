"""
Request helpers shared by the route blueprints.
"""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify, request

from todo_app.models import ValidationError

_TRUE_VALUES = {"true", "1", "on", "yes"}
_FALSE_VALUES = {"false", "0", "off", "no"}


def wants_json() -> bool:
    """Return True when the client prefers a JSON response over HTML."""
    best = request.accept_mimetypes.best_match(["text/html", "application/json"])
    return best == "application/json"


def request_data() -> dict[str, Any]:
    """
    Return the request payload as a dictionary.

    JSON bodies take precedence; otherwise the submitted form is used.
    """
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def parse_bool(value: Any, field: str) -> bool:
    """
    Interpret a JSON or form value as a boolean.

    Raises:
        ValidationError: If the value is missing or not boolean-like.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ValidationError(f"'{field}' must be true or false")


def parse_todo_id(raw: str) -> int:
    """
    Convert a to-do id taken from the URL into an integer.

    Raises:
        ValidationError: If the value is not a run of ASCII digits.
    """
    if raw.isascii() and raw.isdigit():
        return int(raw)
    raise ValidationError("Todo not found")


def json_error(message: str, status_code: int) -> tuple[Response, int]:
    """Build a ``{"error": ...}`` JSON response."""
    return jsonify({"error": message}), status_code
