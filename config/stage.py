from __future__ import annotations

from config.base import CommonSettings, env_file_config
from config.database import get_database_url


class StageSettings(CommonSettings):
    # Required, as in production: stage never signs tokens with a built-in key
    SECRET_KEY: str
    APP_ENV: str = "stage"
    DEBUG: bool = False

    # PostgreSQL connection parts, assembled into DATABASE_URL
    DB_DRIVER: str = "postgresql+asyncpg"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "asset_audit"

    model_config = env_file_config("staging")

    @property
    def DATABASE_URL(self) -> str:
        return get_database_url(
            driver=self.DB_DRIVER,
            host=self.DB_HOST,
            port=self.DB_PORT,
            user=self.DB_USER,
            password=self.DB_PASSWORD,
            name=self.DB_NAME,
        )
