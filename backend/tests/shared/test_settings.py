"""Tests for shared/config.py."""

import os
from unittest.mock import patch

import pytest

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings()
        assert settings.app_name == "Wedding Portal API"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.app_version == "0.1.0"
        assert settings.autosave_debounce_seconds == 2.0
        assert settings.demo_role == "client"
        assert settings.photographer_name == "Sky Photography Team"
        assert settings.company_name == "Sky Photography"

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000", "LOG_LEVEL": "DEBUG"}):
            settings = Settings()
            assert settings.debug is True
            assert settings.port == 9000
            assert settings.log_level == "DEBUG"

    def test_loads_supabase_config_from_env(self):
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_ANON_KEY": "test-anon-key",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
        }):
            settings = Settings()
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_anon_key == "test-anon-key"
            assert settings.supabase_service_role_key == "test-service-key"


class TestBackendConfigured:
    def test_unconfigured_by_default(self):
        assert Settings().backend_configured is False

    def test_configured_with_url_and_anon_key(self):
        settings = Settings(supabase_url="https://abc.supabase.co", supabase_anon_key="key")
        assert settings.backend_configured is True

    @pytest.mark.parametrize(
        "url,key",
        [
            ("https://abc.supabase.co", ""),
            ("", "key"),
            ("https://placeholder.supabase.co", "key"),
            ("https://abc.supabase.co", "placeholder-anon-key"),
        ],
    )
    def test_missing_or_placeholder_values_mean_demo(self, url, key):
        settings = Settings(supabase_url=url, supabase_anon_key=key)
        assert settings.backend_configured is False

    def test_service_role_key_alone_is_not_enough(self):
        settings = Settings(supabase_url="https://abc.supabase.co", supabase_service_role_key="svc")
        assert settings.backend_configured is False


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_environment(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("DEMO_ROLE", "admin")
        get_settings.cache_clear()
        second = get_settings()

        assert first.demo_role == "client"
        assert second.demo_role == "admin"
