# api/dashboard/views.py
"""
Dashboard and aggregate statistics endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.deps import CurrentUser
from db import get_session
from .models import DashboardOverview
from . import db_manager

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/overview",
    response_model=DashboardOverview,
    summary="Get high-level overview statistics",
)
async def get_overview_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> DashboardOverview:
    """
    Asset counts by status and category, today's verifications, assets due
    for verification and open complaints.
    """
    stats = await db_manager.get_overview_stats(db, stale_days=settings.VERIFICATION_STALE_DAYS)
    return DashboardOverview(**stats)
