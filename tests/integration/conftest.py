"""
Shared fixtures for integration tests.

All integration tests:
1. Are async tests marked with @pytest.mark.asyncio
2. Use the `client` fixture (AsyncClient over ASGITransport)
3. Use the `test_db` fixture (in-memory SQLite AsyncSession)

Verification is unconfigured by default; use `use_provider` to plug in a
FakeLLMProvider for a single test.

Example:
    @pytest.mark.asyncio
    async def test_something(client, use_provider):
        use_provider('{"assessment": "X", "severity": "low"}')
        response = await client.post("/verify", json={"description": "..."})
        assert response.status_code == 200
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.admin import admin_auth_service
from app.core.database import get_db
from app.main import app
from app.models import Base, Report
from app.reports.images import get_image_store
from app.verification import VerificationEngine, get_verification_engine

SQLALCHEMY_TEST_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_db():
    """Fresh in-memory database per test; tables are dropped afterwards."""
    engine = create_async_engine(
        SQLALCHEMY_TEST_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def client(test_db, image_store):
    """
    AsyncClient against the app with the database, verification engine and
    image store overridden.
    """

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_verification_engine] = lambda: VerificationEngine(None)
    app.dependency_overrides[get_image_store] = lambda: image_store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def use_provider(client, fake_provider):
    """Configure verification with a FakeLLMProvider; returns the provider."""

    def _use(response: str = "", error: Exception = None):
        provider = fake_provider(response=response, error=error)
        engine = VerificationEngine(provider)
        app.dependency_overrides[get_verification_engine] = lambda: engine
        return provider

    return _use


@pytest_asyncio.fixture
async def report_count(test_db):
    async def _count() -> int:
        result = await test_db.execute(select(func.count()).select_from(Report))
        return result.scalar_one()

    return _count


@pytest_asyncio.fixture
async def test_admin(test_db):
    return await admin_auth_service.create_admin(
        "admin@example.org", "s3cret-pass", test_db
    )


@pytest_asyncio.fixture
async def admin_headers(test_admin):
    access_token = admin_auth_service.create_access_token(
        data={"sub": test_admin.id, "email": test_admin.email}
    )
    return {"Authorization": f"Bearer {access_token}"}
