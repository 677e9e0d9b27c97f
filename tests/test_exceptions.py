import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import IntegrityError

from dochub.core.exceptions import NotFoundError, register_exception_handlers


def _app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.post("/constraint")
    async def constraint():
        raise IntegrityError(
            "INSERT INTO things", {}, Exception("UNIQUE constraint failed: things.name")
        )

    @app.get("/missing")
    async def missing():
        raise NotFoundError("Thing not found")

    return app


@pytest.mark.asyncio
async def test_unmapped_integrity_error_is_a_conflict():
    async with AsyncClient(transport=ASGITransport(app=_app()), base_url="http://test") as client:
        resp = await client.post("/constraint")

    assert resp.status_code == 409
    assert resp.json() == {
        "error": {"code": "CONFLICT", "message": "The request conflicts with existing data"}
    }


@pytest.mark.asyncio
async def test_app_exception_keeps_its_status_and_message():
    async with AsyncClient(transport=ASGITransport(app=_app()), base_url="http://test") as client:
        resp = await client.get("/missing")

    assert resp.status_code == 404
    assert resp.json() == {"error": {"code": "NOT_FOUND", "message": "Thing not found"}}
