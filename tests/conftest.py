"""
Shared pytest fixtures for the Todo Manager test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation by providing fresh data for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories
- Database setup/teardown
- Driving the real CSRF token flow through rendered HTML
"""

import os
from collections.abc import Callable
from datetime import date

import pytest
from flask import g

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from tests.helpers import DEFAULT_PASSWORD, fake, login
from todo_app import create_app, db
from todo_app.models import Todo, User, today


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")

    # db_session keeps an app context pushed, and test-client requests reuse
    # it, so request globals such as the cached CSRF token would otherwise
    # carry over from one request to the next.
    @application.teardown_request
    def _reset_request_globals(exc):
        for name in list(g):
            g.pop(name, None)

    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client that keeps cookies between requests.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Create a fresh database for each test.

    Yields:
        The Flask-SQLAlchemy extension bound to an app context.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def user_factory(db_session) -> Callable[..., User]:
    """
    Factory fixture for creating User instances.

    Example:
        def test_something(user_factory):
            user = user_factory(email="someone@example.com")
    """

    def _create_user(
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        user = User(
            first_name=first_name or fake.first_name(),
            last_name=last_name or fake.last_name(),
            email=User.normalize_email(email or fake.unique.email()),
        )
        user.set_password(password)
        db_session.session.add(user)
        db_session.session.commit()
        return user

    return _create_user


@pytest.fixture
def todo_factory(db_session) -> Callable[..., Todo]:
    """
    Factory fixture for creating Todo instances owned by a given user.

    Example:
        def test_something(user_factory, todo_factory):
            todo = todo_factory(user_factory(), completed=True)
    """

    def _create_todo(
        owner: User,
        title: str | None = None,
        due_date: date | None = None,
        completed: bool = False,
    ) -> Todo:
        todo = Todo(
            title=title or fake.sentence(nb_words=4),
            due_date=due_date or today(),
            completed=completed,
            user_id=owner.id,
        )
        db_session.session.add(todo)
        db_session.session.commit()
        return todo

    return _create_todo


@pytest.fixture
def signed_in_user(client, user_factory) -> User:
    """
    Create a user and log the shared ``client`` in as them.

    Returns:
        The signed-in User.
    """
    user = user_factory()
    response = login(client, user.email)
    assert response.status_code == 302
    return user
