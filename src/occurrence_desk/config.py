"""
Application settings.

Values come from environment variables prefixed with ``OCCURRENCE_DESK_``
or from a local ``.env`` file::

    OCCURRENCE_DESK_API_BASE_URL=https://api.example.com
    OCCURRENCE_DESK_API_TOKEN=...
    OCCURRENCE_DESK_TIMEZONE=America/Sao_Paulo
"""

from __future__ import annotations

from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OCCURRENCE_DESK_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "occurrence-desk"
    app_env: str = "development"
    debug: bool = False

    # REST API
    api_base_url: str = "http://localhost:3333"
    api_token: str | None = None
    fetch_page_size: int = 500
    users_page_size: int = 5

    # Operator session
    role: str = "USER"
    user_id: str | None = None

    # Month keys are derived in this zone; None means the host's local zone
    timezone: str | None = None

    site_dir: str = "site"
    api_port: int = 8000

    @property
    def tzinfo(self) -> ZoneInfo | None:
        """Resolved ``ZoneInfo`` for ``timezone``, or None for local time."""
        return ZoneInfo(self.timezone) if self.timezone else None


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
