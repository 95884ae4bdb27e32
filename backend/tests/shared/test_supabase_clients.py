"""Tests for shared/database.py."""

import pytest
from unittest.mock import patch, MagicMock

from shared.database import (
    get_supabase_anon_client,
    get_supabase_client,
    get_supabase_user_client,
    reset_client_cache,
)


class TestSupabaseClient:
    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_creates_service_client(self, mock_settings, mock_create):
        """Should create client with service role key."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.return_value = MagicMock()

        client = get_supabase_client()

        mock_create.assert_called_once_with("https://test.supabase.co", "test-key")
        assert client is not None

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_caches_service_client(self, mock_settings, mock_create):
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.return_value = MagicMock()

        client1 = get_supabase_client()
        client2 = get_supabase_client()

        mock_create.assert_called_once()
        assert client1 is client2

    @patch("shared.database.get_settings")
    def test_raises_without_service_key(self, mock_settings):
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = ""

        with pytest.raises(RuntimeError, match="configuration missing"):
            get_supabase_client()

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_reset_client_cache(self, mock_settings, mock_create):
        """Should reset the cache and allow new client creation."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.side_effect = [MagicMock(name="client1"), MagicMock(name="client2")]

        client1 = get_supabase_client()
        reset_client_cache()
        client2 = get_supabase_client()

        assert mock_create.call_count == 2
        assert client1 is not client2


class TestAnonAndUserClients:
    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_anon_client_is_never_cached(self, mock_settings, mock_create):
        """Auth calls keep session state on the client, so each call gets a new one."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = "test-anon-key"
        mock_create.side_effect = [MagicMock(), MagicMock()]

        assert get_supabase_anon_client() is not get_supabase_anon_client()
        mock_create.assert_called_with("https://test.supabase.co", "test-anon-key")

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_user_client_carries_token(self, mock_settings, mock_create):
        """PostgREST requests should run under the caller's token."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = "test-anon-key"
        mock_client = MagicMock()
        mock_create.return_value = mock_client

        client = get_supabase_user_client("user-access-token")

        mock_client.postgrest.auth.assert_called_once_with("user-access-token")
        assert client is mock_client

    @patch("shared.database.get_settings")
    def test_user_client_raises_without_config(self, mock_settings):
        mock_settings.return_value.supabase_url = ""
        mock_settings.return_value.supabase_anon_key = ""

        with pytest.raises(RuntimeError, match="configuration missing"):
            get_supabase_user_client("token")
