"""Tests for the health check API endpoint."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def test_client():
    """Create a test client for the API router alone."""
    from fastapi import FastAPI
    from beanfolio.api.routes import router

    app = FastAPI()
    app.include_router(router, prefix="/api")

    return TestClient(app)


class TestHealthEndpoint:
    """Test the /api/health endpoint."""

    def test_health_check_returns_ok_status(self, test_client):
        """Test that health check returns status 'ok'."""
        response = test_client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "beanfolio"

    def test_health_check_lists_export_formats(self, test_client):
        response = test_client.get("/api/health")

        assert response.json()["config"]["export_formats"] == ["csv", "tsv", "xlsx", "ods"]

    def test_health_check_reports_credentials_without_paths(self, test_client):
        """Test that only a presence flag is exposed for OAuth credentials."""
        config = test_client.get("/api/health").json()["config"]

        assert isinstance(config["google_credentials_configured"], bool)
        assert "google_credentials_path" not in config
        assert config["archive_sheet_name"]


class TestCreateApp:
    def test_factory_mounts_router(self):
        from beanfolio.api import create_app

        client = TestClient(create_app())

        assert client.get("/api/health").status_code == 200
