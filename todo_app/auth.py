"""
Session authentication helpers.

The authenticated user's id is kept in the signed Flask session cookie.
``login_required`` resolves it to a :class:`~todo_app.models.User` for
every protected view and stashes it on ``g`` so handlers can read
``g.user`` without another lookup.
"""

from __future__ import annotations

import logging
from functools import wraps

from flask import g, redirect, session, url_for

from todo_app import db
from todo_app.models import User

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


def login_user(user: User) -> None:
    """Start a fresh session for ``user``."""
    session.clear()
    session[SESSION_USER_KEY] = user.id
    logger.info("User %s logged in", user.id)


def logout_user() -> None:
    """Drop all session state, including the CSRF token."""
    user_id = session.get(SESSION_USER_KEY)
    session.clear()
    if user_id is not None:
        logger.info("User %s logged out", user_id)


def current_user() -> User | None:
    """
    Return the user bound to the current session, if any.

    A session pointing at a user that no longer exists is cleared.
    """
    user_id = session.get(SESSION_USER_KEY)
    if user_id is None:
        return None

    user = db.session.get(User, user_id)
    if user is None:
        logger.warning("Session referenced missing user %s", user_id)
        session.pop(SESSION_USER_KEY, None)
    return user


def login_required(view_func):
    """
    Decorator that requires an authenticated session for view routes.

    Anonymous requests are redirected to the login page.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            return redirect(url_for("auth.login"))

        g.user = user
        return view_func(*args, **kwargs)

    return wrapper
