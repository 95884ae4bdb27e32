"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
By default every test runs in demo mode (no Supabase configuration); use the
`configured_settings` fixture to switch the process to a configured backend.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Optional
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.forms.registry import FormStoreRegistry
from modules.forms.scheduler import ManualScheduler
from modules.persistence.factory import reset_demo_backend
from modules.persistence.memory_backend import InMemoryBackend
from shared.config import get_settings
from shared.database import reset_client_cache


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

# Fixed "now" for deterministic services
FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

SUPABASE_ENV_VARS = (
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_JWT_SECRET",
    "SUPABASE_DB_URL",
    "DEMO_ROLE",
)


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
    full_name: Optional[str] = None,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified
        full_name: Optional name stored in user_metadata

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
        "user_metadata": {"full_name": full_name} if full_name else {},
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def _reset_state() -> None:
    get_settings.cache_clear()
    reset_container()
    reset_demo_backend()
    reset_client_cache()


@pytest.fixture(autouse=True)
def demo_environment(monkeypatch):
    """Run every test without Supabase configuration and with fresh singletons."""
    for name in SUPABASE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    _reset_state()
    yield
    _reset_state()


@pytest.fixture
def configured_settings(monkeypatch):
    """Switch the process to a configured Supabase backend."""
    monkeypatch.setenv("SUPABASE_URL", "https://test-project.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "test-anon-key")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
    monkeypatch.setenv("SUPABASE_JWT_SECRET", TEST_JWT_SECRET)
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.backend_configured
    return settings


@pytest.fixture
def demo_backend() -> InMemoryBackend:
    """Demo backend pinned to FIXED_NOW."""
    return InMemoryBackend(clock=lambda: FIXED_NOW)


@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def form_registry(manual_scheduler: ManualScheduler) -> FormStoreRegistry:
    """Registry whose autosaves only run when the test advances the clock."""
    return FormStoreRegistry(manual_scheduler)


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
