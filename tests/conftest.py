"""Shared fixtures: an in-memory database per test and an ASGI client bound to it."""

import os

# Must be set before dochub.core.config is imported
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import dochub.domain  # noqa: E402,F401
from dochub.db.base import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from dochub.main import app  # noqa: E402

from tests.helpers import API, ApiUser  # noqa: E402


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    async def _get_test_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def make_user(client):
    """Factory: register and log in a user, returning an :class:`ApiUser`."""

    async def _make(username: str, password: str = "s3cret-pass") -> ApiUser:
        email = f"{username}@example.com"
        resp = await client.post(
            f"{API}/users", json={"username": username, "email": email, "password": password}
        )
        assert resp.status_code == 201, resp.text
        user_id = resp.json()["data"]["id"]

        resp = await client.post(f"{API}/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return ApiUser(user_id, username, email, password, resp.json()["data"]["token"])

    return _make


@pytest_asyncio.fixture
async def alice(make_user) -> ApiUser:
    return await make_user("alice")


@pytest_asyncio.fixture
async def bob(make_user) -> ApiUser:
    return await make_user("bob")


@pytest_asyncio.fixture
async def carol(make_user) -> ApiUser:
    return await make_user("carol")
