"""
Backend selection.

The configuration decides once which backend the process talks to: the
live Supabase backend when credentials are present, the in-memory demo
backend otherwise.
"""

import logging
from typing import Optional

from shared.config import Settings, get_settings
from shared.database import get_supabase_client, get_supabase_user_client

from .interfaces import IPersistenceBackend
from .memory_backend import InMemoryBackend
from .supabase_backend import SupabaseBackend

logger = logging.getLogger(__name__)

_demo_backend: Optional[InMemoryBackend] = None


def get_demo_backend() -> InMemoryBackend:
    """Get the in-memory demo backend singleton."""
    global _demo_backend
    if _demo_backend is None:
        _demo_backend = InMemoryBackend()
    return _demo_backend


def reset_demo_backend() -> None:
    """Reset the demo backend singleton (for testing)."""
    global _demo_backend
    _demo_backend = None


def get_persistence_backend(
    access_token: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> IPersistenceBackend:
    """
    Pick the persistence backend for a caller.

    Args:
        access_token: The caller's JWT. When given, queries run as that
            user so row-level security applies. Without it the service
            role client is used (operator tooling only).
        settings: Override settings (defaults to the cached settings)

    Returns:
        SupabaseBackend when configured, the demo InMemoryBackend otherwise
    """
    settings = settings or get_settings()
    if not settings.backend_configured:
        return get_demo_backend()

    if access_token:
        return SupabaseBackend(get_supabase_user_client(access_token))

    logger.debug("Using service role client for persistence")
    return SupabaseBackend(get_supabase_client())
