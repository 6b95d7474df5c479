"""Test fixtures — a fresh in-memory database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Env vars are set before any warden import, because settings are read
   once at import time (SQLite URL, a test secret, cheap bcrypt rounds).
2. Each test gets its own in-memory aiosqlite engine with the schema
   created from Base.metadata. StaticPool keeps the single connection
   alive so every session sees the same database.
3. The app's get_db dependency is overridden to hand out that session.
   Auth is NOT overridden: tests sign up and log in through the real
   pipeline and send real bearer tokens.
"""

import os

os.environ.setdefault("WARDEN_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("WARDEN_JWT_SECRET", "test-secret-key-for-testing-only-0123456789")
os.environ.setdefault("WARDEN_BCRYPT_ROUNDS", "4")

import uuid  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from warden.db.engine import get_db  # noqa: E402
from warden.db.models import Base  # noqa: E402
from warden.main import app  # noqa: E402

TEST_PASSWORD = "password1234"


@pytest_asyncio.fixture()
async def db_engine():
    """Per-test in-memory database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(db_engine):
    session = AsyncSession(bind=db_engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client with the app's get_db overridden for testing."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def register(client):
    """Factory: sign up + log in a fresh user, return (user, auth headers)."""
    async def _register(email: str | None = None, password: str = TEST_PASSWORD):
        email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
        r = await client.post(
            "/auth/signup", json={"email": email, "password": password}
        )
        assert r.status_code == 201, r.text
        user = r.json()

        r = await client.post(
            "/auth/login", json={"email": email, "password": password}
        )
        assert r.status_code == 200, r.text
        token = r.json()["access_token"]
        return user, {"Authorization": f"Bearer {token}"}

    return _register


@pytest_asyncio.fixture()
async def auth_headers(register):
    """Bearer headers for one freshly registered user."""
    _, headers = await register()
    return headers
