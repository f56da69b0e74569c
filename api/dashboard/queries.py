# api/dashboard/queries.py
"""
SQLAlchemy query builders for dashboard statistics. Deleted assets are
excluded everywhere.
"""
from datetime import datetime

from sqlalchemy import select, func, or_

from db_models.asset import Asset
from db_models.complaint import Complaint, ComplaintStatus
from db_models.verification_log import VerificationLog

_live = Asset.deleted_at.is_(None)


def count_total_assets():
    """Count live assets."""
    return select(func.count(Asset.id)).where(_live)


def count_assets_by_status():
    return (
        select(Asset.status, func.count(Asset.id))
        .where(_live)
        .group_by(Asset.status)
    )


def count_assets_by_category():
    return (
        select(Asset.category, func.count(Asset.id))
        .where(_live)
        .group_by(Asset.category)
    )


def count_verifications_since(since: datetime):
    """Count verification events recorded at or after `since`."""
    return (
        select(func.count(VerificationLog.id))
        .join(Asset, Asset.id == VerificationLog.asset_id)
        .where(_live, VerificationLog.timestamp >= since)
    )


def count_pending_verification(stale_before: datetime):
    """Count live assets never verified, or last verified before `stale_before`."""
    return (
        select(func.count(Asset.id))
        .where(
            _live,
            or_(
                Asset.last_verified_date.is_(None),
                Asset.last_verified_date < stale_before,
            ),
        )
    )


def count_pending_complaints():
    return (
        select(func.count(Complaint.id))
        .join(Asset, Asset.id == Complaint.asset_id)
        .where(_live, Complaint.status == ComplaintStatus.PENDING.value)
    )
