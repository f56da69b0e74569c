# api/verification/db_manager.py
"""
Verification service: appends verification logs and keeps each asset's
`last_verified_date` / `verified_by` equal to its newest log.
"""
import logging
import uuid
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from api.assets import queries as asset_queries
from api.assets.db_manager import AssetNotFoundError, get_asset_detail
from core.schemas import ensure_utc
from db_models.asset import Asset, utcnow
from db_models.verification_log import VerificationLog
from . import queries

logger = logging.getLogger(__name__)


def new_log_id() -> str:
    return f"log-{uuid.uuid4().hex}"


async def record_verification(
    db: AsyncSession,
    asset_id: str,
    verifier_name: str,
) -> tuple[VerificationLog, Asset]:
    """
    Record that `verifier_name` physically verified the asset right now.

    The log insert and the asset summary update commit in one transaction
    while the asset row is locked. The summary only moves forward in time,
    so the stored row always names the newest log. Per asset, log timestamps are strictly
    increasing: a clock reading that is not after the newest existing log is
    moved to one microsecond past it.

    Returns: (new_log, asset joined with refreshed history)
    Raises: AssetNotFoundError (nothing is written), ValueError for a blank name
    """
    verifier_name = (verifier_name or "").strip()
    if not verifier_name:
        raise ValueError("Verifier name must not be blank")

    result = await db.execute(asset_queries.select_asset_for_update(asset_id))
    asset = result.scalar_one_or_none()
    if asset is None:
        logger.warning("Verification rejected: asset %s not found", asset_id)
        raise AssetNotFoundError(f"Asset {asset_id} not found")

    timestamp = utcnow()
    result = await db.execute(queries.select_latest_log_timestamp(asset.id))
    latest = ensure_utc(result.scalar_one_or_none())
    if latest is not None and timestamp <= latest:
        timestamp = latest + timedelta(microseconds=1)

    log = VerificationLog(
        id=new_log_id(),
        asset_id=asset.id,
        asset_name=asset.name,  # snapshot, not a live join
        verified_by=verifier_name,
        timestamp=timestamp,
    )
    db.add(log)
    await db.flush()

    # Conditional in SQL: a writer holding an older timestamp never overwrites
    # a newer summary, even where FOR UPDATE is not enforced (SQLite).
    await db.execute(
        queries.update_summary_if_newer(asset.id, timestamp, verifier_name),
        execution_options={"synchronize_session": False},
    )

    await db.commit()

    logger.info(
        "Asset %s verified by %s",
        asset.id,
        verifier_name,
        extra={"extra_data": {"asset_id": asset.id, "log_id": log.id}},
    )

    updated = await get_asset_detail(db, asset.id)
    return log, updated


async def list_logs(
    db: AsyncSession,
    asset_id: str | None = None,
    limit: int | None = None,
) -> list[VerificationLog]:
    """
    The verification audit trail, newest first. Logs of deleted assets are
    included: history is never dropped.
    """
    result = await db.execute(queries.select_logs(asset_id=asset_id, limit=limit))
    return list(result.scalars().all())
