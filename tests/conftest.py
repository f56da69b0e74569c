import os
import tempfile
from pathlib import Path

import pytest

# Settings are chosen at import time; select the test profile first
os.environ.setdefault("MODE", "test")

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL") or (
    "sqlite+aiosqlite:///" + str(Path(tempfile.gettempdir()) / "asset_audit_pytest.db")
)
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from httpx import AsyncClient, ASGITransport

from main import app as fastapi_app
import db as project_db
import db_models  # ensure models are imported
from config.database import get_sync_url
from db_base import Base
from db_models.user import User
from core.security import get_password_hash, create_access_token

ADMIN_ID = "u-admin"
STAFF_ID = "u-staff"
ADMIN_PASSWORD = "admin@123"
STAFF_PASSWORD = "staff@123"

sync_url = get_sync_url(TEST_DATABASE_URL)

# Use an async engine for app interactions
engine = create_async_engine(
    TEST_DATABASE_URL,
    future=True,
    echo=False,
    poolclass=NullPool  # Disable connection pooling for tests
)
AsyncSessionTest = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False
)


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
def prepare_db():
    # Create/drop tables for tests (Destructive - use a dedicated test DB)
    sync_engine = create_engine(sync_url)
    Base.metadata.drop_all(bind=sync_engine)
    Base.metadata.create_all(bind=sync_engine)
    yield
    Base.metadata.drop_all(bind=sync_engine)
    sync_engine.dispose()


@pytest.fixture(scope="session", autouse=True)
def seed_users(prepare_db):
    """Seed one admin and one staff account"""
    sync_engine = create_engine(sync_url)
    Session = sessionmaker(bind=sync_engine)

    with Session() as session:
        session.add_all([
            User(
                id=ADMIN_ID,
                name="Admin User",
                username="admin123",
                hashed_password=get_password_hash(ADMIN_PASSWORD),
                role="ADMIN",
                designation="System Administrator",
                is_active=True,
            ),
            User(
                id=STAFF_ID,
                name="John Staff",
                username="staff123",
                hashed_password=get_password_hash(STAFF_PASSWORD),
                role="STAFF",
                designation="IT Support",
                is_active=True,
            ),
        ])
        session.commit()
    sync_engine.dispose()


@pytest.fixture
async def db_session():
    async with AsyncSessionTest() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def async_client():
    # Override the get_session dependency to create a fresh session for each request
    async def override_get_session():
        async with AsyncSessionTest() as session:
            yield session

    fastapi_app.dependency_overrides[project_db.get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://testserver") as ac:
        yield ac

    # Clean up
    fastapi_app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def admin_token():
    """Generate an admin JWT token for tests."""
    return create_access_token(data={"sub": ADMIN_ID})


@pytest.fixture(scope="session")
def staff_token():
    """Generate a staff JWT token for tests."""
    return create_access_token(data={"sub": STAFF_ID})


@pytest.fixture(scope="session")
def admin_headers(admin_token):
    """Return authorization headers for admin user."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture(scope="session")
def staff_headers(staff_token):
    """Return authorization headers for staff user."""
    return {"Authorization": f"Bearer {staff_token}"}


@pytest.fixture
def make_asset(async_client, admin_headers):
    """Create an asset through the API and return its JSON body."""
    counter = {"n": 0}

    async def _make(**overrides):
        counter["n"] += 1
        payload = {
            "name": "MacBook Pro M2",
            "category": "Laptop",
            "serialNumber": f"SN-{os.urandom(4).hex()}-{counter['n']}",
            "status": "Active",
        }
        payload.update(overrides)
        resp = await async_client.post("/api/assets", json=payload, headers=admin_headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
