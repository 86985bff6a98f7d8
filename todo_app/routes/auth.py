"""
Authentication routes for the Todo Manager web interface.

Routes:
    GET  /          - Landing page (redirects signed-in users to /todos)
    GET  /signup    - Signup form
    POST /users     - Create an account and start a session
    GET  /login     - Login form
    POST /session   - Check credentials and start a session
    GET  /signout   - End the session
"""

import logging

from flask import Blueprint, flash, redirect, render_template, url_for
from sqlalchemy.exc import IntegrityError

from todo_app import db
from todo_app.auth import current_user, login_user, logout_user
from todo_app.models import User, ValidationError
from todo_app.routes.helpers import request_data

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/")
def index():
    """Render the landing page, or go straight to the list when signed in."""
    if current_user() is not None:
        return redirect(url_for("todos.list_todos"))
    return render_template("index.html")


@auth_bp.route("/signup", methods=["GET"])
def signup():
    """Render the signup form."""
    if current_user() is not None:
        return redirect(url_for("todos.list_todos"))
    return render_template("signup.html")


@auth_bp.route("/users", methods=["POST"])
def create_user():
    """
    Handle signup form submission.

    Form Data:
        firstName: Given name (required)
        lastName: Family name
        email: Login email (required, unique)
        password: Password (required, minimum length enforced)

    Returns:
        Redirect to /todos on success, or back to /signup on error.
    """
    logger.info("POST /users - Creating user")

    data = request_data()
    first_name = data.get("firstName")
    last_name = data.get("lastName")
    email = data.get("email")
    password = data.get("password")

    try:
        User.validate_signup(first_name, email, password)
    except ValidationError as exc:
        logger.warning("Signup validation failed: %s", exc)
        flash(str(exc), "error")
        return redirect(url_for("auth.signup"))

    if User.find_by_email(email) is not None:
        logger.warning("Signup rejected: email already registered")
        flash("An account with that email already exists", "error")
        return redirect(url_for("auth.signup"))

    user = User(
        first_name=first_name.strip(),
        last_name=(last_name.strip() or None) if isinstance(last_name, str) else None,
        email=User.normalize_email(email),
    )
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.warning("Signup rejected: email already registered")
        flash("An account with that email already exists", "error")
        return redirect(url_for("auth.signup"))

    logger.info("Created user %s", user.id)
    login_user(user)
    return redirect(url_for("todos.list_todos"))


@auth_bp.route("/login", methods=["GET"])
def login():
    """Render the login form."""
    if current_user() is not None:
        return redirect(url_for("todos.list_todos"))
    return render_template("login.html")


@auth_bp.route("/session", methods=["POST"])
def create_session():
    """
    Handle login form submission.

    Returns:
        Redirect to /todos on success, or back to /login on failure.
    """
    logger.info("POST /session - Logging in")

    data = request_data()
    user = User.authenticate(data.get("email"), data.get("password"))
    if user is None:
        logger.warning("Login failed")
        flash("Invalid email or password", "error")
        return redirect(url_for("auth.login"))

    login_user(user)
    return redirect(url_for("todos.list_todos"))


@auth_bp.route("/signout", methods=["GET"])
def signout():
    """End the session and return to the landing page."""
    logout_user()
    flash("Signed out successfully", "success")
    return redirect(url_for("auth.index"))
