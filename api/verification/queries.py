# api/verification/queries.py
"""
SQLAlchemy query builders for verification history.
"""
from sqlalchemy import select, func, or_, update

from db_models.asset import Asset
from db_models.verification_log import VerificationLog


def select_latest_log_timestamp(asset_id: str):
    """Timestamp of the newest verification log for an asset (NULL if none)."""
    return (
        select(func.max(VerificationLog.timestamp))
        .where(VerificationLog.asset_id == asset_id)
    )


def select_logs(asset_id: str | None = None, limit: int | None = None):
    """
    Select verification logs across all assets, or for one asset.
    Returns newest first.
    """
    stmt = select(VerificationLog)
    if asset_id is not None:
        stmt = stmt.where(VerificationLog.asset_id == asset_id)
    stmt = stmt.order_by(VerificationLog.timestamp.desc(), VerificationLog.id.desc())
    if limit is not None:
        stmt = stmt.limit(limit)
    return stmt


def update_summary_if_newer(asset_id: str, timestamp, verifier_name: str):
    """
    Point the asset summary at a new log unless a newer one is already recorded.
    """
    return (
        update(Asset)
        .where(
            Asset.id == asset_id,
            or_(Asset.last_verified_date.is_(None), Asset.last_verified_date < timestamp),
        )
        .values(last_verified_date=timestamp, verified_by=verifier_name)
    )
