from unittest.mock import patch

import pytest

pytestmark = pytest.mark.integration


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert "services" in data

    def test_health_check_reports_database_and_cache(self, client):
        services = client.get("/health").json()["services"]

        assert services["database"]["status"] == "up"
        assert services["cache"]["status"] == "up"
        assert "response_time_ms" in services["database"]

    def test_health_check_is_public(self, client, settings):
        settings.ADMIN_SECRET = "unrelated"

        assert client.get("/health").status_code == 200

    def test_cache_failure_returns_503(self, client):
        with patch("modules.core.views.cache.get", return_value=None):
            response = client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["services"]["cache"] == {"status": "down"}
