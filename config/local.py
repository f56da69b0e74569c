from __future__ import annotations

from config.base import CommonSettings, env_file_config


class LocalSettings(CommonSettings):
    # SQLite file next to the code; no database server needed for development
    DATABASE_URL: str = "sqlite+aiosqlite:///./asset_audit.db"
    APP_ENV: str = "local"
    SECRET_KEY: str = "local-dev-secret-key"
    DEBUG: bool = True
    AUTO_CREATE_TABLES: bool = True

    model_config = env_file_config("local")
