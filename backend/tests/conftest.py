"""
Shared fixtures: each test gets its own app over a fresh in-memory SQLite db.

create_app() receives explicit Settings, so every test runs with its own
signing secret and a cheap password hash work factor.
"""

from __future__ import annotations

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.security import PasswordHasher
from app.main import create_app

TEST_SECRET = "test-secret-key-0123456789abcdef"
FAST_ROUNDS = 1000


def make_settings(**overrides) -> Settings:
    values = {
        "app_env": "test",
        "database_url": "sqlite://",
        "jwt_secret_key": TEST_SECRET,
        "password_hash_rounds": FAST_ROUNDS,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    # the context manager runs lifespan, which creates the tables
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client) -> Generator:
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=FAST_ROUNDS)


@pytest.fixture
def register(client: TestClient) -> Callable[..., dict]:
    """Register a user through the API and return the response body."""

    def _register(email: str, password: str = "secret1", role: str | None = None, name: str = "Tester") -> dict:
        body = {"name": name, "email": email, "password": password}
        if role is not None:
            body["role"] = role
        resp = client.post("/auth/register", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _register


@pytest.fixture
def login(client: TestClient) -> Callable[[str, str], str]:
    def _login(email: str, password: str = "secret1") -> str:
        resp = client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return resp.json()["token"]

    return _login


@pytest.fixture
def auth_headers(register, login) -> Callable[[str], dict]:
    """Register a fresh user with the given role and return Bearer headers for it."""
    counter = {"n": 0}

    def _headers(role: str = "user") -> dict:
        counter["n"] += 1
        email = f"{role}{counter['n']}@example.com"
        register(email, role=role)
        return {"Authorization": f"Bearer {login(email)}"}

    return _headers
