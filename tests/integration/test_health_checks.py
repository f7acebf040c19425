"""
Integration tests for health checks

Verifica que todos los endpoints de health check funcionan correctamente:
- /health y /health/live - Liveness sin dependencias externas
- /health/db - Conectividad de la base de datos (o "in_memory")
- /health/ready - Readiness probe, 503 si el almacén no responde
"""

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine

from booking_engine.api.dependencies import get_session
from booking_engine.infrastructure.db.engine import build_sessionmaker
from booking_engine.main import app


@pytest_asyncio.fixture
async def broken_session(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'db.sqlite'}")
    async with build_sessionmaker(engine)() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def client_with_session():
    """Cliente httpx en el mismo event loop que la sesión de prueba."""
    clients = []

    def _client(session) -> httpx.AsyncClient:
        app.dependency_overrides[get_session] = lambda: session
        client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield _client
    for client in clients:
        await client.aclose()
    app.dependency_overrides.clear()


class TestLiveness:
    def test_basic_health_endpoint(self, client: TestClient):
        """Debe retornar 200 OK sin dependencias externas."""
        response = client.get("/health")

        assert response.status_code == 200, f"/health falló: {response.json()}"
        assert response.json() == {"status": "ok", "service": "booking-engine"}

    def test_liveness_alias(self, client: TestClient):
        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestInMemoryStore:
    def test_database_check_reports_in_memory(self, client: TestClient):
        response = client.get("/health/db")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "component": "in_memory"}

    def test_readiness_reports_in_memory(self, client: TestClient):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "checks": {"store": "in_memory"}}


class TestSQLStore:
    @pytest.mark.asyncio
    async def test_healthy_database(self, client_with_session, sql_session):
        client = client_with_session(sql_session)

        db = await client.get("/health/db")
        ready = await client.get("/health/ready")

        assert db.status_code == 200
        assert db.json()["component"] == "database"
        assert ready.status_code == 200
        assert ready.json()["checks"]["database"] == "healthy"

    @pytest.mark.asyncio
    async def test_unreachable_database_returns_503(self, client_with_session, broken_session):
        client = client_with_session(broken_session)

        db = await client.get("/health/db")
        ready = await client.get("/health/ready")

        assert db.status_code == 503
        assert db.json()["error"] == "Database connection failed"
        assert ready.status_code == 503
        assert ready.json() == {"status": "not_ready", "checks": {"database": "unhealthy"}}
