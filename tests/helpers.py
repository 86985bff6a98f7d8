"""
Helpers for driving the HTML forms from tests.

Every mutating request needs the ``_csrf`` token rendered on a page the
client fetched earlier, so these helpers read it out of the HTML the
same way a browser form would submit it.
"""

from bs4 import BeautifulSoup
from faker import Faker

# Initialize Faker for generating test data
fake = Faker()

DEFAULT_PASSWORD = "userrules"


def extract_csrf_token(response) -> str:
    """
    Read the ``_csrf`` hidden input from a rendered page.

    Args:
        response: Flask test client response with an HTML body.

    Returns:
        The token value.
    """
    soup = BeautifulSoup(response.get_data(as_text=True), "html.parser")
    field = soup.select_one("[name=_csrf]")
    assert field is not None, "page has no _csrf field"
    return field["value"]


def fetch_csrf_token(client, path: str = "/todos") -> str:
    """GET ``path`` and return the CSRF token rendered on it."""
    response = client.get(path)
    assert response.status_code == 200
    return extract_csrf_token(response)


def login(client, email: str, password: str = DEFAULT_PASSWORD):
    """Log ``client`` in through the login form."""
    token = fetch_csrf_token(client, "/login")
    return client.post(
        "/session",
        data={"email": email, "password": password, "_csrf": token},
    )


def signup(client, **overrides):
    """Create an account through the signup form."""
    token = fetch_csrf_token(client, "/signup")
    form = {
        "firstName": fake.first_name(),
        "lastName": fake.last_name(),
        "email": fake.unique.email(),
        "password": DEFAULT_PASSWORD,
        "_csrf": token,
    }
    form.update(overrides)
    return client.post("/users", data=form)


def grouped_todos(client) -> dict:
    """Fetch the grouped to-do listing as JSON."""
    response = client.get("/todos", headers={"Accept": "application/json"})
    assert response.status_code == 200
    return response.get_json()


def reload(db_session, model, pk):
    """Re-read a row, bypassing anything cached in the fixture's session."""
    db_session.session.expire_all()
    return db_session.session.get(model, pk)
