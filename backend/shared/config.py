"""
Centralized configuration for the Wedding Portal backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, AUTOSAVE_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


PLACEHOLDER_MARKER = "placeholder"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Wedding Portal API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase (the URL and anon key are the only required pair)
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_db_url: str = ""

    # Wedding form autosave
    autosave_debounce_seconds: float = 2.0
    form_store_idle_seconds: float = 1800.0

    # Demo mode
    demo_role: str = "client"

    # Email merge fields
    photographer_name: str = "Sky Photography Team"
    company_name: str = "Sky Photography"

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:5173"

    @property
    def backend_configured(self) -> bool:
        """
        Whether real Supabase credentials are present.

        Missing values or values still carrying the placeholder marker
        switch the whole application into demo mode.
        """
        if not self.supabase_url or not self.supabase_anon_key:
            return False
        return (
            PLACEHOLDER_MARKER not in self.supabase_url
            and PLACEHOLDER_MARKER not in self.supabase_anon_key
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
