# api/complaints/db_manager.py
"""
Complaint workflow: filing against an asset and the Pending -> Resolved
transition.
"""
import logging
import uuid
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from api.assets.db_manager import get_asset_or_raise
from core.errors import InvalidStateError, NotFoundError
from db_models.asset import utcnow
from db_models.complaint import Complaint, ComplaintStatus
from . import queries

logger = logging.getLogger(__name__)


class ComplaintNotFoundError(NotFoundError):
    """Raised when complaint doesn't exist"""
    pass


class ComplaintStatusError(InvalidStateError):
    """Raised when a complaint status value or transition is invalid"""
    pass


def new_complaint_id() -> str:
    return f"c-{uuid.uuid4().hex}"


def _check_status_value(value: str) -> ComplaintStatus:
    try:
        return ComplaintStatus(value)
    except ValueError:
        allowed = [s.value for s in ComplaintStatus]
        raise ComplaintStatusError(f"Invalid complaint status {value!r}. Must be one of: {allowed}") from None


async def get_complaint_or_raise(db: AsyncSession, complaint_id: str) -> Complaint:
    result = await db.execute(queries.select_complaint_by_id(complaint_id))
    complaint = result.scalar_one_or_none()
    if complaint is None:
        raise ComplaintNotFoundError(f"Complaint {complaint_id} not found")
    return complaint


async def file_complaint(
    db: AsyncSession,
    asset_id: str,
    reported_by: str,
    description: str,
    complaint_date: date | None = None,
    status: str | None = None,
) -> Complaint:
    """
    File a complaint against an asset. New complaints are always Pending.

    Raises: AssetNotFoundError, ComplaintStatusError, ValueError
    """
    if status is not None and _check_status_value(status) is not ComplaintStatus.PENDING:
        raise ComplaintStatusError("New complaints must start as Pending")

    reported_by = (reported_by or "").strip()
    description = (description or "").strip()
    if not reported_by:
        raise ValueError("Reporter name must not be blank")
    if not description:
        raise ValueError("Complaint description must not be blank")

    asset = await get_asset_or_raise(db, asset_id)

    complaint = Complaint(
        id=new_complaint_id(),
        asset_id=asset.id,
        asset_name=asset.name,  # snapshot, not a live join
        reported_by=reported_by,
        date=complaint_date or date.today(),
        description=description,
        status=ComplaintStatus.PENDING.value,
    )
    db.add(complaint)
    await db.commit()
    await db.refresh(complaint)

    logger.info("Complaint %s filed against asset %s by %s", complaint.id, asset.id, reported_by)
    return complaint


async def resolve_complaint(db: AsyncSession, complaint_id: str) -> Complaint:
    """
    Move a Pending complaint to Resolved. The same row is updated.

    Raises:
        ComplaintNotFoundError: If complaint doesn't exist
        ComplaintStatusError: If complaint is already Resolved
    """
    result = await db.execute(queries.select_complaint_for_update(complaint_id))
    complaint = result.scalar_one_or_none()
    if complaint is None:
        raise ComplaintNotFoundError(f"Complaint {complaint_id} not found")

    if complaint.status != ComplaintStatus.PENDING.value:
        logger.warning("Resolve rejected: complaint %s is %s", complaint_id, complaint.status)
        raise ComplaintStatusError(
            f"Cannot resolve complaint {complaint_id}: current status is {complaint.status}. "
            "Only Pending complaints can be resolved."
        )

    complaint.status = ComplaintStatus.RESOLVED.value
    complaint.resolved_at = utcnow()
    await db.commit()
    await db.refresh(complaint)

    logger.info("Complaint %s resolved", complaint_id)
    return complaint


async def set_complaint_status(db: AsyncSession, complaint_id: str, status: str) -> Complaint:
    """
    Generic status setter. The only legal transition is Pending -> Resolved;
    anything else raises ComplaintStatusError.
    """
    target = _check_status_value(status)
    if target is not ComplaintStatus.RESOLVED:
        await get_complaint_or_raise(db, complaint_id)
        raise ComplaintStatusError(f"Complaint {complaint_id} cannot move to {target.value}")
    return await resolve_complaint(db, complaint_id)


async def list_complaints(db: AsyncSession, status: str | None = None) -> list[Complaint]:
    """Return complaints newest first, optionally only those with `status`."""
    if status is not None:
        _check_status_value(status)
    result = await db.execute(queries.select_complaints(status))
    return list(result.scalars().all())
