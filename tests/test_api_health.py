"""Tests for health check endpoints."""

from unittest.mock import AsyncMock

from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from racevault.db.database import get_session
from racevault.db.operations import insert_asset
from racevault.main import app
from racevault.models.assets import BoostRecord, DriverRecord


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Liveness check returns healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data.get("database") is None


class TestReadyEndpoint:
    async def test_ready_returns_ready(self, client: AsyncClient) -> None:
        """Readiness check returns ready when DB is connected."""
        response = await client.get("/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["database"] == "connected"
        assert data["catalog"] == {"driver": 0, "car_part": 0, "boost": 0}

    async def test_ready_reports_catalog_counts(
        self, client: AsyncClient, session: AsyncSession
    ) -> None:
        """Readiness check counts imported assets."""
        await insert_asset(session, DriverRecord(id="d1", name="Alonso"))
        await insert_asset(session, BoostRecord(id="b1", name="Boost TURBO"))
        await session.commit()

        response = await client.get("/ready")

        assert response.json()["catalog"] == {"driver": 1, "car_part": 0, "boost": 1}

    async def test_ready_returns_503_on_db_failure(self) -> None:
        """Readiness check returns 503 when DB is unavailable."""

        async def override_get_session_broken():
            mock_session = AsyncMock()
            mock_session.execute.side_effect = OperationalError(
                "SELECT 1", {}, Exception("Database connection failed")
            )
            yield mock_session

        app.dependency_overrides[get_session] = override_get_session_broken

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/ready")

        app.dependency_overrides.clear()

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not ready"
        assert data["database"] == "disconnected"
        assert data["catalog"] is None


def test_app_imports() -> None:
    """Verify the app can be imported without errors."""
    assert app.title == "RaceVault"
