"""GET /api/users/me and GET /api/users."""

from __future__ import annotations

import pytest


def test_me_returns_resolved_identity(client, register, login) -> None:
    created = register("me@example.com", role="manager", name="Meg")["user"]
    token = login("me@example.com")

    resp = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json()["user"] == created


@pytest.mark.parametrize("role", ["user", "manager", "admin"])
def test_me_is_open_to_every_role(client, auth_headers, role: str) -> None:
    resp = client.get("/api/users/me", headers=auth_headers(role))
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == role


def test_me_never_exposes_password_hash(client, auth_headers) -> None:
    body = client.get("/api/users/me", headers=auth_headers()).json()
    assert "password_hash" not in body["user"]
    assert "passwordHash" not in body["user"]


def test_admin_lists_users_with_count(client, auth_headers, register) -> None:
    headers = auth_headers("admin")
    register("second@example.com")

    resp = client.get("/api/users", headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert [u["email"] for u in body["users"]] == ["admin1@example.com", "second@example.com"]
    assert all("password_hash" not in u for u in body["users"])


@pytest.mark.parametrize("role", ["user", "manager"])
def test_non_admin_cannot_list_users(client, auth_headers, role: str) -> None:
    resp = client.get("/api/users", headers=auth_headers(role))
    assert resp.status_code == 403
    assert resp.json() == {"message": f"User role {role} is not authorized to access this route"}
