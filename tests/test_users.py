import pytest

from dochub.repositories.user import UserRepository

from tests.helpers import API, add_member, create_document, create_organization, create_version


@pytest.mark.asyncio
async def test_register_returns_user_without_password(client):
    resp = await client.post(
        f"{API}/users",
        json={"username": "dave", "email": "dave@example.com", "password": "pw"},
    )

    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["username"] == "dave"
    assert data["email"] == "dave@example.com"
    assert set(data) == {"id", "username", "email", "createdAt", "updatedAt"}


@pytest.mark.asyncio
async def test_register_duplicate_username(client, alice):
    resp = await client.post(
        f"{API}/users",
        json={"username": "alice", "email": "other@example.com", "password": "pw"},
    )

    assert resp.status_code == 409
    assert resp.json()["error"]["message"] == "User already exists"


@pytest.mark.asyncio
async def test_register_duplicate_email(client, alice):
    resp = await client.post(
        f"{API}/users",
        json={"username": "alice2", "email": alice.email, "password": "pw"},
    )

    assert resp.status_code == 409
    assert resp.json()["error"]["message"] == "Email already exists"


@pytest.mark.asyncio
async def test_register_requires_fields(client):
    resp = await client.post(f"{API}/users", json={"username": "x"})

    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_users_requires_auth_and_paginates(client, alice, bob, carol):
    assert (await client.get(f"{API}/users")).status_code == 401

    resp = await client.get(f"{API}/users", params={"limit": 2}, headers=alice.headers)

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["data"]) == 2
    assert body["meta"] == {"total": 3, "page": 1, "limit": 2, "pages": 2}


@pytest.mark.asyncio
async def test_list_users_ignores_unknown_sort_field(client, alice):
    resp = await client.get(f"{API}/users", params={"sort": "bogus"}, headers=alice.headers)

    assert resp.status_code == 200
    assert resp.json()["meta"]["total"] == 1


@pytest.mark.asyncio
async def test_get_user_self_only(client, alice, bob):
    resp = await client.get(f"{API}/users/{alice.id}", headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == alice.id

    resp = await client.get(f"{API}/users/{bob.id}", headers=alice.headers)
    assert resp.status_code == 403

    resp = await client.get(f"{API}/users/missing-id", headers=alice.headers)
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "User not found"


@pytest.mark.asyncio
async def test_update_user_empty_body(client, alice):
    resp = await client.put(f"{API}/users/{alice.id}", json={}, headers=alice.headers)

    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "No data provided for update"


@pytest.mark.asyncio
async def test_update_user_conflicts(client, alice, bob):
    resp = await client.put(
        f"{API}/users/{alice.id}", json={"username": "bob"}, headers=alice.headers
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["message"] == "User already exists"

    resp = await client.put(
        f"{API}/users/{alice.id}", json={"email": bob.email}, headers=alice.headers
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["message"] == "Email already exists"


@pytest.mark.asyncio
async def test_update_user_keeps_own_values(client, alice):
    resp = await client.put(
        f"{API}/users/{alice.id}",
        json={"username": "alice", "email": alice.email},
        headers=alice.headers,
    )

    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_update_other_user_is_forbidden(client, alice, bob):
    resp = await client.put(
        f"{API}/users/{bob.id}", json={"username": "hacked"}, headers=alice.headers
    )

    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_update_password_rehashes(client, alice):
    resp = await client.put(
        f"{API}/users/{alice.id}", json={"password": "new-pass"}, headers=alice.headers
    )
    assert resp.status_code == 200

    old = await client.post(
        f"{API}/auth/login", json={"email": alice.email, "password": alice.password}
    )
    new = await client.post(f"{API}/auth/login", json={"email": alice.email, "password": "new-pass"})

    assert old.status_code == 401
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_delete_other_user_is_forbidden(client, alice, bob):
    resp = await client.delete(f"{API}/users/{bob.id}", headers=alice.headers)

    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_delete_sole_owner_is_rejected(client, alice):
    await create_organization(client, alice)

    resp = await client.delete(f"{API}/users/{alice.id}", headers=alice.headers)

    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_delete_user_clears_memberships_and_authorship(client, alice, bob):
    org = await create_organization(client, alice)
    await add_member(client, alice, org["id"], bob, "owner")
    doc = await create_document(client, alice, org["id"])
    version = await create_version(client, alice, doc["id"], "v1")

    resp = await client.delete(f"{API}/users/{alice.id}", headers=alice.headers)
    assert resp.status_code == 204

    data = (await client.get(f"{API}/organizations/data/{org['id']}", headers=bob.headers)).json()
    assert [m["userId"] for m in data["data"]["members"]] == [bob.id]

    doc_resp = await client.get(f"{API}/documents/id/{doc['id']}", headers=bob.headers)
    assert doc_resp.json()["data"]["ownerId"] is None

    version_resp = await client.get(
        f"{API}/document-versions/id/{version['id']}", headers=bob.headers
    )
    assert version_resp.json()["data"]["createdById"] is None


async def _no_user(self, value):
    return None


@pytest.mark.asyncio
async def test_register_duplicate_caught_by_unique_constraint(client, alice, monkeypatch):
    # Simulates a concurrent registration that slips past the lookup
    monkeypatch.setattr(UserRepository, "get_by_username", _no_user)
    monkeypatch.setattr(UserRepository, "get_by_email", _no_user)

    resp = await client.post(
        f"{API}/users",
        json={"username": "alice2", "email": alice.email, "password": "pw"},
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["message"] == "Email already exists"

    resp = await client.post(
        f"{API}/users",
        json={"username": "alice", "email": "other@example.com", "password": "pw"},
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["message"] == "User already exists"

    # The failed transaction was rolled back; the database is still usable
    resp = await client.get(f"{API}/users/{alice.id}", headers=alice.headers)
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_update_duplicate_caught_by_unique_constraint(client, alice, bob, monkeypatch):
    monkeypatch.setattr(UserRepository, "get_by_username", _no_user)
    monkeypatch.setattr(UserRepository, "get_by_email", _no_user)

    resp = await client.put(
        f"{API}/users/{alice.id}", json={"email": bob.email}, headers=alice.headers
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["message"] == "Email already exists"

    resp = await client.put(
        f"{API}/users/{alice.id}", json={"username": "bob"}, headers=alice.headers
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["message"] == "User already exists"

    resp = await client.get(f"{API}/users/{alice.id}", headers=alice.headers)
    assert resp.json()["data"]["username"] == "alice"


@pytest.mark.asyncio
async def test_list_users_cannot_sort_by_password_hash(client, alice, bob, carol):
    default = await client.get(f"{API}/users", headers=alice.headers)
    by_hash = await client.get(
        f"{API}/users", params={"sort": "password_hash", "order": "asc"}, headers=alice.headers
    )
    newest_first = await client.get(
        f"{API}/users", params={"sort": "password_hash", "order": "desc"}, headers=alice.headers
    )

    assert by_hash.status_code == 200
    ids = [u["id"] for u in default.json()["data"]]
    # Falls back to created_at
    assert [u["id"] for u in newest_first.json()["data"]] == ids
    created = [u["createdAt"] for u in by_hash.json()["data"]]
    assert created == sorted(created)
