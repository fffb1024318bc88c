import pytest
from fastapi.testclient import TestClient

from notes_backend.api.config import Settings
from notes_backend.api.main import create_app
from notes_backend.security import PasswordHasher, TokenService
from notes_database import Database

TEST_SECRET = "test-secret-do-not-use"


@pytest.fixture
def settings():
    """Settings for tests: fixed secret and the cheapest bcrypt cost."""
    return Settings(jwt_secret=TEST_SECRET, bcrypt_rounds=4, database_url="sqlite://")


@pytest.fixture
def database():
    """A fresh in-memory SQLite database per test."""
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def db_session(database):
    """Provide a SQLAlchemy session for direct store tests."""
    session = database.session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenService(TEST_SECRET)


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest.fixture
def client(app):
    """Fixture for FastAPI TestClient bound to the test database."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def user_data():
    """Returns default user data for registration."""
    return {
        "username": "alice",
        "email": "alice@example.com",
        "password": "alicepassword123",
    }


@pytest.fixture
def second_user_data():
    """Returns a second user's data."""
    return {
        "username": "bob",
        "email": "bob@example.com",
        "password": "bobpassword456",
    }


def register_and_auth(client, username, email, password):
    """Helper for registering then logging in to get a bearer token."""
    r1 = client.post("/api/auth/register", json={
        "username": username, "email": email, "password": password
    })
    assert r1.status_code in (201, 400)

    r2 = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r2.status_code == 200
    return r2.json()["token"]


@pytest.fixture
def auth_header(client, user_data):
    """Returns {'Authorization': 'Bearer <token>'} for default user."""
    token = register_and_auth(client, user_data["username"], user_data["email"], user_data["password"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def second_auth_header(client, second_user_data):
    """Returns auth header for second user."""
    token = register_and_auth(
        client, second_user_data["username"], second_user_data["email"], second_user_data["password"]
    )
    return {"Authorization": f"Bearer {token}"}
