# api/dashboard/db_manager.py
"""
Business logic for dashboard statistics.
"""
from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from db_models.asset import AssetCategory, AssetStatus
from . import queries


def _breakdown(rows, choices) -> dict[str, int]:
    # Every known value appears, even with a zero count
    counts = {c.value: 0 for c in choices}
    for key, count in rows:
        counts[key] = count
    return counts


async def get_overview_stats(
    db: AsyncSession,
    stale_days: int,
    now: datetime | None = None,
) -> dict:
    """
    Headline numbers for the dashboard.

    `now` is injectable so the day boundary and staleness window can be tested.
    """
    now = now or datetime.now(timezone.utc)
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    stale_before = now - timedelta(days=stale_days)

    result = await db.execute(queries.count_total_assets())
    total_assets = result.scalar() or 0

    result = await db.execute(queries.count_assets_by_status())
    by_status = _breakdown(result.all(), AssetStatus)

    result = await db.execute(queries.count_assets_by_category())
    by_category = _breakdown(result.all(), AssetCategory)

    result = await db.execute(queries.count_verifications_since(start_of_day))
    verified_today = result.scalar() or 0

    result = await db.execute(queries.count_pending_verification(stale_before))
    pending_verification = result.scalar() or 0

    result = await db.execute(queries.count_pending_complaints())
    pending_complaints = result.scalar() or 0

    return {
        "total_assets": total_assets,
        "by_status": by_status,
        "by_category": by_category,
        "verified_today": verified_today,
        "pending_verification": pending_verification,
        "pending_complaints": pending_complaints,
    }
