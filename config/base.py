"""Settings shared by every environment."""
from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Per-environment overrides live in <project root>/env/.env.<name>
ENV_DIR = Path(__file__).resolve().parents[1] / "env"


def env_file_config(name: str) -> SettingsConfigDict:
    """pydantic-settings config reading `env/.env.<name>` when that file exists."""
    env_file = ENV_DIR / f".env.{name}"
    return SettingsConfigDict(
        env_file=str(env_file) if env_file.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )


class CommonSettings(BaseSettings):
    APP_ENV: str = "local"
    # Signs access tokens; each environment supplies its own
    SECRET_KEY: str
    DEBUG: bool = False

    # Routers are mounted under this prefix (the web client calls `<host>/api/...`)
    API_PREFIX: str = "/api"

    # Origin of the web client; embedded in QR payloads so a scan opens the detail view
    PUBLIC_BASE_URL: str = "http://localhost:5173"

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    LOG_LEVEL: str = "INFO"

    # Assets not verified within this many days count as pending on the dashboard
    VERIFICATION_STALE_DAYS: int = 30

    # Create tables from ORM metadata on startup (dev only, prefer Alembic elsewhere)
    AUTO_CREATE_TABLES: bool = False

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()
