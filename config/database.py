"""Database URL helpers shared by the app, Alembic and the seed script."""
from urllib.parse import quote_plus

# Async driver -> sync driver used by Alembic and one-off scripts
_SYNC_DRIVERS = {
    "postgresql+asyncpg": "postgresql+psycopg2",
    "sqlite+aiosqlite": "sqlite",
}


def get_database_url(
    driver: str,
    host: str,
    port: int,
    user: str,
    password: str,
    name: str,
) -> str:
    """
    Build a URL from parts; the password is URL-quoted.

    >>> get_database_url("postgresql+asyncpg", "db", 5432, "app", "p@ss", "assets")
    'postgresql+asyncpg://app:p%40ss@db:5432/assets'
    """
    return f"{driver}://{user}:{quote_plus(password)}@{host}:{port}/{name}"


def get_sync_url(url: str) -> str:
    """Swap an async driver for its sync counterpart; other URLs pass through."""
    for async_driver, sync_driver in _SYNC_DRIVERS.items():
        if url.startswith(async_driver + ":"):
            return sync_driver + url[len(async_driver):]
    return url


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")
