# db.py
"""
Async engine and session factory. Models live in `db_models`; `Base` lives
in `db_base` so Alembic can import it without the async drivers.
"""
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from config import settings
from config.database import is_sqlite
from db_base import Base


def _engine_options(url: str) -> dict:
    if is_sqlite(url):
        # aiosqlite runs each connection in its own thread
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **_engine_options(settings.DATABASE_URL),
)

# expire_on_commit=False: responses are built from objects after commit
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def init_db() -> None:
    """
    Create any missing tables from ORM metadata (local development).

    Elsewhere the schema is owned by the Alembic revisions.
    """
    import db_models  # noqa: F401  (registers tables on Base.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    await engine.dispose()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    async with AsyncSessionLocal() as session:
        yield session
