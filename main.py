import json
import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from core.logging import configure_logging
from db import dispose_engine, init_db
from api.assets.views import router as assets_router
from api.auth.views import router as auth_router
from api.complaints.views import asset_router as complaint_assets_router
from api.complaints.views import router as complaints_router
from api.dashboard.views import router as dashboard_router
from api.users.views import router as users_router
from api.verification.views import router as verification_assets_router
from api.verification.views import verification_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def get_cors_origins() -> list[str]:
    """Get CORS origins from environment variable or use defaults."""
    cors_env = os.environ.get("CORS_ORIGINS", "")

    # Try to parse as JSON array
    if cors_env:
        try:
            origins = json.loads(cors_env)
            if isinstance(origins, list):
                return origins
        except json.JSONDecodeError:
            # If not valid JSON, treat as comma-separated
            return [o.strip() for o in cors_env.split(",") if o.strip()]

    # Default origins for development
    return [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
        settings.PUBLIC_BASE_URL,
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        await init_db()
        logger.info("Database tables created from ORM metadata")
    logger.info("Asset audit API started (env=%s)", settings.APP_ENV)
    yield
    await dispose_engine()


app = FastAPI(
    title="Asset Audit API",
    description="API for tracking physical assets, verification events and complaints",
    version="1.0.0",
    lifespan=lifespan,
)

cors_origins = get_cors_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Authentication and accounts
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(users_router, prefix=settings.API_PREFIX)

# Business endpoints; the verify and complaint routers share the /assets prefix
app.include_router(assets_router, prefix=settings.API_PREFIX)
app.include_router(verification_assets_router, prefix=settings.API_PREFIX)
app.include_router(verification_router, prefix=settings.API_PREFIX)
app.include_router(complaint_assets_router, prefix=settings.API_PREFIX)
app.include_router(complaints_router, prefix=settings.API_PREFIX)
app.include_router(dashboard_router, prefix=settings.API_PREFIX)


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
