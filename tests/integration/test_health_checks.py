"""
Integration tests de los health checks.

- /health - Health check básico
- /health/live - Liveness probe
- /health/db - Health check de base de datos
- /health/ready - Readiness probe
"""

import time
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.api.routers.health import SERVICE_NAME
from app.config import Settings, get_settings
from app.main import app


class TestHealthChecks:
    def test_basic_health_endpoint(self, client: TestClient):
        """Debe retornar 200 OK sin dependencias externas."""
        response = client.get("/health")
        assert response.status_code == 200

        assert response.json() == {"status": "ok", "service": SERVICE_NAME}

    def test_liveness_probe(self, client: TestClient):
        response = client.get("/health/live")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_database_health_check(self, client: TestClient):
        """Ejecuta SELECT 1 contra el engine configurado (SQLite in-memory en tests)."""
        response = client.get("/health/db")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "component": "database"}

    def test_database_health_check_failure(self, client: TestClient):
        with patch("app.api.routers.health._database_ok", return_value=False):
            response = client.get("/health/db")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["component"] == "database"

    def test_readiness_in_memory_mode(self, client: TestClient):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "checks": {"storage": "in_memory"}}

    def test_readiness_sql_mode(self, client: TestClient):
        app.dependency_overrides[get_settings] = lambda: Settings(use_in_memory=False)

        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"] == {"storage": "sql", "database": "healthy"}

    def test_readiness_sql_mode_database_down(self, client: TestClient):
        app.dependency_overrides[get_settings] = lambda: Settings(use_in_memory=False)

        with patch("app.api.routers.health._database_ok", return_value=False):
            response = client.get("/health/ready")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not_ready"
        assert data["checks"]["database"] == "unhealthy"

    def test_health_endpoints_response_time(self, client: TestClient):
        """Los health checks deben responder en menos de 1 segundo."""
        for endpoint in ["/health", "/health/live", "/health/db", "/health/ready"]:
            start = time.monotonic()
            response = client.get(endpoint)
            duration = time.monotonic() - start

            assert duration < 1.0, f"{endpoint} tardó {duration:.2f}s (debe ser < 1s)"
            assert response.status_code == 200


@pytest.mark.integration
class TestHealthChecksNoSideEffects:
    def test_repeated_calls_do_not_touch_reservations(self, client: TestClient, bundle):
        for _ in range(10):
            client.get("/health")
            client.get("/health/ready")

        assert bundle["store"].reservations == {}
        assert client.get("/health").status_code == 200
