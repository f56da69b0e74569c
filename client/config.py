from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client configuration, read from ASSET_CLIENT_* environment variables."""

    API_URL: str = "http://localhost:8000/api"
    REQUEST_TIMEOUT: float = 10.0
    STATE_FILE: Path = Path.home() / ".asset_audit" / "state.json"

    model_config = SettingsConfigDict(env_prefix="ASSET_CLIENT_")
