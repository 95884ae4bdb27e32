"""Tests for health check endpoints."""

from fastapi.testclient import TestClient

from api.app import create_app


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self):
        """Health endpoint should return 200 with status."""
        response = TestClient(create_app()).get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"

    def test_health_response_structure(self):
        response = TestClient(create_app()).get("/api/health")
        assert set(response.json().keys()) == {"status", "version"}

    def test_readiness_in_demo_mode(self):
        """Without Supabase credentials the API reports the demo backend."""
        response = TestClient(create_app()).get("/api/ready")
        assert response.status_code == 200
        data = response.json()
        assert data == {"status": "ready", "backend": "demo", "demo_mode": True}

    def test_readiness_when_configured(self, configured_settings):
        response = TestClient(create_app()).get("/api/ready")
        data = response.json()
        assert data["backend"] == "supabase"
        assert data["demo_mode"] is False

    def test_placeholder_credentials_mean_demo(self, monkeypatch):
        from shared.config import get_settings

        monkeypatch.setenv("SUPABASE_URL", "https://placeholder.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "placeholder-key")
        get_settings.cache_clear()

        response = TestClient(create_app()).get("/api/ready")
        assert response.json()["backend"] == "demo"
