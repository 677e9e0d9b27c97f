import pytest

from dochub.repositories.document import DocumentVersionRepository
from tests.helpers import API, add_member, create_document, create_organization, create_version

VERSIONS = f"{API}/document-versions"


@pytest.mark.asyncio
async def test_create_version_becomes_active(client, alice):
    org = await create_organization(client, alice)
    doc = await create_document(client, alice, org["id"])

    resp = await client.post(
        VERSIONS,
        json={"name": "v1", "documentId": doc["id"], "filePath": "uploads/contract-v1.pdf"},
        headers=alice.headers,
    )

    assert resp.status_code == 201
    version = resp.json()["data"]
    assert version["createdById"] == alice.id
    assert version["filePath"] == "uploads/contract-v1.pdf"

    updated = (await client.get(f"{API}/documents/id/{doc['id']}", headers=alice.headers)).json()
    assert updated["data"]["activeVersionId"] == version["id"]
    assert updated["data"]["updatedAt"] >= doc["updatedAt"]


@pytest.mark.asyncio
async def test_create_version_branches(client, alice, bob):
    org = await create_organization(client, alice)
    await add_member(client, alice, org["id"], bob, "read")
    doc = await create_document(client, alice, org["id"])
    await create_version(client, alice, doc["id"], "v1")

    resp = await client.post(VERSIONS, json={"name": "v1", "documentId": "missing"}, headers=alice.headers)
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "Document not found"

    resp = await client.post(VERSIONS, json={"name": "v2", "documentId": doc["id"]}, headers=bob.headers)
    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "You do not have edit permissions in this organization"

    resp = await client.post(VERSIONS, json={"name": "v1", "documentId": doc["id"]}, headers=alice.headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "A version with this name already exists for this document"

    resp = await client.post(VERSIONS, json={"name": "x" * 101, "documentId": doc["id"]}, headers=alice.headers)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_duplicate_version_name_caught_by_unique_constraint(client, alice, monkeypatch):
    org = await create_organization(client, alice)
    doc = await create_document(client, alice, org["id"])
    await create_version(client, alice, doc["id"], "v1")
    v2 = await create_version(client, alice, doc["id"], "v2")

    async def _no_version(self, document_id, name):
        return None

    monkeypatch.setattr(DocumentVersionRepository, "get_by_name", _no_version)

    resp = await client.post(VERSIONS, json={"name": "v1", "documentId": doc["id"]}, headers=alice.headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "A version with this name already exists for this document"

    resp = await client.patch(f"{VERSIONS}/{v2['id']}", json={"name": "v1"}, headers=alice.headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "A version with this name already exists for this document"

    resp = await client.get(f"{VERSIONS}/document/{doc['id']}", headers=alice.headers)
    assert sorted(v["name"] for v in resp.json()["data"]) == ["v1", "v2"]


@pytest.mark.asyncio
async def test_same_version_name_on_different_documents(client, alice):
    org = await create_organization(client, alice)
    first = await create_document(client, alice, org["id"], name="First")
    second = await create_document(client, alice, org["id"], name="Second")

    await create_version(client, alice, first["id"], "v1")
    await create_version(client, alice, second["id"], "v1")


@pytest.mark.asyncio
async def test_cannot_version_a_trashed_document(client, alice):
    org = await create_organization(client, alice)
    doc = await create_document(client, alice, org["id"])
    await client.patch(f"{API}/documents/{doc['id']}/trash", headers=alice.headers)

    resp = await client.post(VERSIONS, json={"name": "v1", "documentId": doc["id"]}, headers=alice.headers)

    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_get_version(client, alice, bob):
    org = await create_organization(client, alice)
    doc = await create_document(client, alice, org["id"])
    version = await create_version(client, alice, doc["id"], "v1")

    resp = await client.get(f"{VERSIONS}/id/{version['id']}", headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "v1"

    resp = await client.get(f"{VERSIONS}/id/{version['id']}", headers=bob.headers)
    assert resp.status_code == 403

    resp = await client.get(f"{VERSIONS}/id/missing", headers=alice.headers)
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "Document Version not found"


@pytest.mark.asyncio
async def test_list_versions_by_document_newest_first(client, alice):
    org = await create_organization(client, alice)
    doc = await create_document(client, alice, org["id"])
    for name in ("v1", "v2", "v3"):
        await create_version(client, alice, doc["id"], name)

    resp = await client.get(f"{VERSIONS}/document/{doc['id']}", headers=alice.headers)

    assert resp.status_code == 200
    assert [v["name"] for v in resp.json()["data"]] == ["v3", "v2", "v1"]
    assert resp.json()["meta"]["total"] == 3


@pytest.mark.asyncio
async def test_list_versions_by_user(client, alice, bob):
    org = await create_organization(client, alice)
    await add_member(client, alice, org["id"], bob, "write")
    doc = await create_document(client, alice, org["id"])
    await create_version(client, bob, doc["id"], "bob-v1")
    await create_version(client, alice, doc["id"], "alice-v1")

    resp = await client.get(f"{VERSIONS}/user/{alice.id}", headers=bob.headers)
    assert resp.status_code == 403

    resp = await client.get(f"{VERSIONS}/user/{bob.id}", headers=bob.headers)
    assert [v["name"] for v in resp.json()["data"]] == ["bob-v1"]

    # Leaving the organization hides its versions
    await client.delete(f"{API}/organizations/removeUser/{org['id']}/{bob.id}", headers=bob.headers)
    resp = await client.get(f"{VERSIONS}/user/{bob.id}", headers=bob.headers)
    assert resp.json()["data"] == []
    assert resp.json()["meta"]["total"] == 0


@pytest.mark.asyncio
async def test_update_version(client, alice, bob):
    org = await create_organization(client, alice)
    await add_member(client, alice, org["id"], bob, "write")
    doc = await create_document(client, alice, org["id"])
    await create_version(client, alice, doc["id"], "v1")
    v2 = await create_version(client, alice, doc["id"], "v2")

    resp = await client.patch(f"{VERSIONS}/{v2['id']}", json={}, headers=bob.headers)
    assert resp.status_code == 400

    resp = await client.patch(f"{VERSIONS}/{v2['id']}", json={"name": "v1"}, headers=bob.headers)
    assert resp.status_code == 400

    resp = await client.patch(f"{VERSIONS}/{v2['id']}", json={"name": "final"}, headers=bob.headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "final"

    resp = await client.patch(f"{VERSIONS}/missing", json={"name": "x"}, headers=bob.headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_version_requires_owner(client, alice, bob):
    org = await create_organization(client, alice)
    await add_member(client, alice, org["id"], bob, "write")
    doc = await create_document(client, alice, org["id"])
    version = await create_version(client, bob, doc["id"], "v1")

    resp = await client.delete(f"{VERSIONS}/{version['id']}", headers=bob.headers)

    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "You do not have owner permissions in this organization"


@pytest.mark.asyncio
async def test_delete_active_version_falls_back_to_latest(client, alice):
    org = await create_organization(client, alice)
    doc = await create_document(client, alice, org["id"])
    v1 = await create_version(client, alice, doc["id"], "v1")
    v2 = await create_version(client, alice, doc["id"], "v2")

    resp = await client.delete(f"{VERSIONS}/{v2['id']}", headers=alice.headers)
    assert resp.status_code == 204
    current = (await client.get(f"{API}/documents/id/{doc['id']}", headers=alice.headers)).json()
    assert current["data"]["activeVersionId"] == v1["id"]

    resp = await client.delete(f"{VERSIONS}/{v1['id']}", headers=alice.headers)
    assert resp.status_code == 204
    current = (await client.get(f"{API}/documents/id/{doc['id']}", headers=alice.headers)).json()
    assert current["data"]["activeVersionId"] is None

    resp = await client.delete(f"{VERSIONS}/{v1['id']}", headers=alice.headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_inactive_version_keeps_active(client, alice):
    org = await create_organization(client, alice)
    doc = await create_document(client, alice, org["id"])
    v1 = await create_version(client, alice, doc["id"], "v1")
    v2 = await create_version(client, alice, doc["id"], "v2")

    await client.delete(f"{VERSIONS}/{v1['id']}", headers=alice.headers)

    current = (await client.get(f"{API}/documents/id/{doc['id']}", headers=alice.headers)).json()
    assert current["data"]["activeVersionId"] == v2["id"]
