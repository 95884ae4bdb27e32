"""Tests for persistence backend selection."""

from unittest.mock import MagicMock, patch

from modules.persistence.factory import (
    get_demo_backend,
    get_persistence_backend,
    reset_demo_backend,
)
from modules.persistence.memory_backend import InMemoryBackend
from modules.persistence.supabase_backend import SupabaseBackend
from shared.config import Settings


CONFIGURED = Settings(
    supabase_url="https://abc.supabase.co",
    supabase_anon_key="anon",
    supabase_service_role_key="service",
)


class TestGetPersistenceBackend:
    def test_demo_when_unconfigured(self):
        backend = get_persistence_backend(settings=Settings())
        assert isinstance(backend, InMemoryBackend)
        assert backend is get_demo_backend()

    def test_placeholder_credentials_select_demo(self):
        settings = Settings(supabase_url="https://placeholder.supabase.co", supabase_anon_key="anon")
        assert isinstance(get_persistence_backend(settings=settings), InMemoryBackend)

    @patch("modules.persistence.factory.get_supabase_user_client")
    def test_user_token_gets_user_client(self, mock_user_client):
        client = MagicMock()
        mock_user_client.return_value = client

        backend = get_persistence_backend(access_token="token", settings=CONFIGURED)

        mock_user_client.assert_called_once_with("token")
        assert isinstance(backend, SupabaseBackend)
        assert backend._db is client

    @patch("modules.persistence.factory.get_supabase_client")
    def test_no_token_gets_service_client(self, mock_service_client):
        backend = get_persistence_backend(settings=CONFIGURED)

        mock_service_client.assert_called_once_with()
        assert isinstance(backend, SupabaseBackend)


class TestDemoBackendSingleton:
    def test_reset(self):
        first = get_demo_backend()
        reset_demo_backend()
        assert get_demo_backend() is not first
