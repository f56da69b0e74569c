from __future__ import annotations

from config.base import CommonSettings, env_file_config


class ProdSettings(CommonSettings):
    # No defaults: production refuses to start without a database and a signing key
    DATABASE_URL: str
    SECRET_KEY: str
    APP_ENV: str = "production"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"

    model_config = env_file_config("production")
