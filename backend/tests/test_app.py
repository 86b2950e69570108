"""App wiring: root/health, error body shape, settings."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.api.deps_auth import get_db
from app.core.config import Settings

from conftest import make_settings


def test_root_reports_running(client) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"message": "API is running..."}


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_unknown_route_uses_message_body(client) -> None:
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Not Found"}


def test_store_failure_is_generic_server_error(app) -> None:
    def broken_db():
        raise RuntimeError("connection refused: db.internal:5432")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = broken_db
    with TestClient(app, raise_server_exceptions=False) as client:
        resp = client.get("/api/products")

    assert resp.status_code == 500
    assert resp.json() == {"message": "Server Error"}
    assert "db.internal" not in resp.text


def test_apps_with_different_secrets_reject_each_others_tokens(register, client) -> None:
    register("ann@example.com")
    token = client.post("/auth/login", json={"email": "ann@example.com", "password": "secret1"}).json()["token"]

    from app.main import create_app

    other = create_app(make_settings(jwt_secret_key="a-completely-different-secret-value"))
    assert other.state.token_verifier.secret_key != client.app.state.token_verifier.secret_key
    with pytest.raises(ValueError):
        other.state.token_verifier.verify(token)


class TestSettings:
    def test_dev_generates_secret(self) -> None:
        s = Settings(app_env="dev", jwt_secret_key="")
        assert len(s.jwt_secret_key) >= 32

    def test_production_requires_secret(self) -> None:
        with pytest.raises(ValueError):
            Settings(app_env="production", debug=False, jwt_secret_key="")

    def test_short_secret_rejected(self) -> None:
        with pytest.raises(ValueError):
            Settings(app_env="production", jwt_secret_key="short")

    def test_cors_origins(self) -> None:
        assert make_settings().allow_origins == ["*"]
        s = make_settings(cors_origins="https://a.example, http://localhost:3000 ,")
        assert s.allow_origins == ["https://a.example", "http://localhost:3000"]

    def test_token_lifetime_follows_settings(self) -> None:
        from app.main import create_app

        app = create_app(make_settings(access_token_expire_minutes=5))
        assert app.state.token_issuer.expires_delta.total_seconds() == 300
