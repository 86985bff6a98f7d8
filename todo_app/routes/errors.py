"""
Application-wide error handlers.

JSON clients get ``{"error": ...}`` bodies; browsers get a short HTML
error page rendered from ``error.html``.
"""

import logging

from flask import Flask, render_template
from flask_wtf.csrf import CSRFError

from todo_app import db
from todo_app.routes.helpers import json_error, wants_json

logger = logging.getLogger(__name__)


def _error_response(message: str, status_code: int):
    if wants_json():
        return json_error(message, status_code)
    return render_template("error.html", message=message, status_code=status_code), status_code


def register_error_handlers(app: Flask) -> None:
    """Attach the error handlers to ``app``."""

    @app.errorhandler(CSRFError)
    def csrf_error(error: CSRFError):
        """Reject a mutating request with a missing or invalid token."""
        logger.warning("CSRF check failed: %s", error.description)
        return _error_response(error.description, 403)

    @app.errorhandler(404)
    def not_found(error: Exception):
        """Handle 404 Not Found errors."""
        return _error_response("Resource not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(error: Exception):
        """Handle 405 Method Not Allowed errors."""
        return _error_response("Method not allowed", 405)

    @app.errorhandler(500)
    def internal_error(error: Exception):
        """Handle 500 Internal Server errors."""
        logger.error("Internal server error: %s", error)
        db.session.rollback()
        return _error_response("Internal server error", 500)
