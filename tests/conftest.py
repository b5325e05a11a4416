import json
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from racevault.config import settings
from racevault.db.database import get_admin_session, get_session
from racevault.main import app
from racevault.models.db import Base

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
async def client(async_engine):
    """Provide an async test client with overridden database session."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_get_admin_session():
        async with async_session() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_admin_session] = override_get_admin_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Configure an admin token and return headers that carry it."""
    monkeypatch.setattr(settings, "admin_api_token", ADMIN_TOKEN)
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def content_sections() -> dict[str, list[dict[str, Any]]]:
    """A small content cache with every remapping case represented."""
    return {
        "drivers": [
            {
                "id": "d1",
                "name": "DRIVER_NAME_TURBO_1",
                "rarity": 5,
                "series": 1,
                "collectionSubName": "COLLECTION_SE_SUBTITLE_2",
                "minGpTier": 2,
                "ccPrice": 500,
                "driverStatsPerLevel": [{"overtaking": 10}, {"overtaking": 12}],
                "season": 6,
            },
            {
                "id": "d2",
                "name": "DRIVER_NAME_COMMON_1",
                "rarity": 2,
                "series": 5,
                "minGpTier": 1,
                "season": 6,
            },
            {
                "id": "d3",
                "name": "DRIVER_NAME_OLD_1",
                "rarity": 1,
                "series": 2,
                "season": 5,
            },
        ],
        "carparts": [
            {
                "id": "c1",
                "name": "CAR_PART_BRAKES_1",
                "rarity": 3,
                "series": 4,
                "carPartType": 1,
                "carPartStatsPerLevel": [{"speed": 3}],
                "season": 7,
            },
        ],
        "boosts": [
            {"id": "b1", "name": "BOOST_NAME_TURBO", "icon": "boost_turbo", "speedTier": 3},
        ],
    }


@pytest.fixture
def wrapped_payload(content_sections) -> dict[str, Any]:
    return {"_contentResponse": content_sections}


@pytest.fixture
def content_cache_file(wrapped_payload) -> bytes:
    return json.dumps(wrapped_payload).encode()
