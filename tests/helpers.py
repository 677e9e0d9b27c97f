"""HTTP helpers shared by the API tests."""

API = "/api/v1"


class ApiUser:
    """A registered, logged-in user as seen by the tests."""

    def __init__(self, id: str, username: str, email: str, password: str, token: str):
        self.id = id
        self.username = username
        self.email = email
        self.password = password
        self.token = token

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}


async def create_organization(client, owner: ApiUser, *, kind: str = "Collaborative", name: str = "Acme") -> dict:
    resp = await client.post(
        f"{API}/organizations",
        json={"name": name, "description": "test org", "organizationType": kind},
        headers=owner.headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def add_member(client, owner: ApiUser, organization_id: str, user: ApiUser, role: str) -> dict:
    resp = await client.post(
        f"{API}/organizations/addUser",
        json={"organizationId": organization_id, "userId": user.id, "role": role},
        headers=owner.headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def create_document(client, user: ApiUser, organization_id: str, name: str = "Contract") -> dict:
    resp = await client.post(
        f"{API}/documents",
        json={"name": name, "type": "pdf", "description": "", "organizationId": organization_id},
        headers=user.headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def create_version(client, user: ApiUser, document_id: str, name: str) -> dict:
    resp = await client.post(
        f"{API}/document-versions",
        json={"name": name, "documentId": document_id},
        headers=user.headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]
