from __future__ import annotations

from config.base import CommonSettings, env_file_config


class TestSettings(CommonSettings):
    # The test suite points the engine at its own database (see tests/conftest.py)
    DATABASE_URL: str = "sqlite+aiosqlite:///./asset_audit_test.db"
    APP_ENV: str = "test"
    SECRET_KEY: str = "test-secret-key"
    DEBUG: bool = False
    PUBLIC_BASE_URL: str = "http://testclient"

    model_config = env_file_config("test")
