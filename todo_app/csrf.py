"""
CSRF protection for state-changing requests.

Wraps Flask-WTF's ``CSRFProtect`` so the anti-forgery token is accepted
from a JSON request body as well as from form data and headers. Browser
forms embed the token as a hidden ``_csrf`` input rendered with the
``csrf_token()`` template global that Flask-WTF registers.
"""

from __future__ import annotations

from flask import current_app, request
from flask_wtf.csrf import CSRFProtect


class JSONAwareCSRFProtect(CSRFProtect):
    """``CSRFProtect`` that also reads the token from a JSON body."""

    def _get_csrf_token(self) -> str | None:
        token = super()._get_csrf_token()
        if token:
            return token

        payload = request.get_json(silent=True)
        if isinstance(payload, dict):
            value = payload.get(current_app.config["WTF_CSRF_FIELD_NAME"])
            if isinstance(value, str) and value:
                return value
        return None


csrf = JSONAwareCSRFProtect()
