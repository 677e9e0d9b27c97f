from datetime import timedelta

import pytest

from dochub.core.security import create_access_token
from tests.helpers import API


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_login_returns_token_and_user(client, alice):
    resp = await client.post(
        f"{API}/auth/login", json={"email": alice.email, "password": alice.password}
    )

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["token"]
    assert data["user"] == {"id": alice.id, "email": alice.email}


@pytest.mark.asyncio
async def test_login_unknown_email(client, alice):
    resp = await client.post(
        f"{API}/auth/login", json={"email": "nobody@example.com", "password": "x"}
    )

    assert resp.status_code == 401
    assert resp.json()["error"] == {"code": "UNAUTHORIZED", "message": "Invalid email"}


@pytest.mark.asyncio
async def test_login_wrong_password(client, alice):
    resp = await client.post(
        f"{API}/auth/login", json={"email": alice.email, "password": "not-it"}
    )

    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Invalid password"


@pytest.mark.asyncio
async def test_login_missing_password_is_a_validation_error(client):
    resp = await client.post(f"{API}/auth/login", json={"email": "alice@example.com"})

    assert resp.status_code == 422
    body = resp.json()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"]


@pytest.mark.asyncio
async def test_me_returns_authenticated_user(client, alice):
    resp = await client.get(f"{API}/auth/me", headers=alice.headers)

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["id"] == alice.id
    assert data["username"] == "alice"
    assert "passwordHash" not in data
    assert "password" not in data


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer not-a-jwt"},
        {"Authorization": "Basic YWxpY2U6cGFzcw=="},
    ],
)
async def test_me_rejects_missing_or_bad_credentials(client, headers):
    resp = await client.get(f"{API}/auth/me", headers=headers)

    assert resp.status_code == 401
    assert resp.json()["error"] == {"code": "UNAUTHORIZED", "message": "Authentication required"}


@pytest.mark.asyncio
async def test_me_rejects_expired_token(client, alice):
    token = create_access_token(alice.id, alice.email, expires_in=timedelta(seconds=-1))

    resp = await client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Authentication required"


@pytest.mark.asyncio
async def test_token_of_deleted_user_is_rejected(client, alice):
    resp = await client.delete(f"{API}/users/{alice.id}", headers=alice.headers)
    assert resp.status_code == 204

    resp = await client.get(f"{API}/auth/me", headers=alice.headers)

    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client):
    resp = await client.get(f"{API}/does-not-exist")

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"
