# api/complaints/views.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.assets.db_manager import AssetNotFoundError
from api.assets.models import ComplaintRead
from core.deps import AdminUser, CurrentUser
from db import get_session
from .models import ComplaintCreate, ComplaintStatusUpdate
from . import db_manager

# Filing lives under the asset it concerns
asset_router = APIRouter(prefix="/assets", tags=["complaints"])
router = APIRouter(prefix="/complaints", tags=["complaints"])


@asset_router.post(
    "/{asset_id}/complaint",
    response_model=ComplaintRead,
    status_code=status.HTTP_201_CREATED,
    summary="File a complaint against an asset",
)
async def file_complaint_endpoint(
    asset_id: str,
    payload: ComplaintCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> ComplaintRead:
    """
    Any signed-in user can report a problem with an asset. The complaint
    starts out Pending and stores the asset name as it was at filing time.
    """
    try:
        complaint = await db_manager.file_complaint(
            db,
            asset_id,
            reported_by=payload.reported_by,
            description=payload.description,
            complaint_date=payload.date,
            status=payload.status,
        )
    except AssetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except db_manager.ComplaintStatusError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return ComplaintRead.model_validate(complaint)


@router.get(
    "",
    response_model=list[ComplaintRead],
    summary="List complaints",
)
async def list_complaints_endpoint(
    current_user: CurrentUser,
    status_filter: Optional[str] = Query(None, alias="status", description="Pending or Resolved"),
    db: AsyncSession = Depends(get_session),
) -> list[ComplaintRead]:
    try:
        complaints = await db_manager.list_complaints(db, status=status_filter)
    except db_manager.ComplaintStatusError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return [ComplaintRead.model_validate(c) for c in complaints]


@router.post(
    "/{complaint_id}/resolve",
    response_model=ComplaintRead,
    summary="Resolve a pending complaint",
)
async def resolve_complaint_endpoint(
    complaint_id: str,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> ComplaintRead:
    """
    Pending -> Resolved. Resolving a complaint twice is rejected.
    """
    try:
        complaint = await db_manager.resolve_complaint(db, complaint_id)
    except db_manager.ComplaintNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except db_manager.ComplaintStatusError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return ComplaintRead.model_validate(complaint)


@router.put(
    "/{complaint_id}/status",
    response_model=ComplaintRead,
    summary="Set a complaint's status",
)
async def set_complaint_status_endpoint(
    complaint_id: str,
    payload: ComplaintStatusUpdate,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> ComplaintRead:
    try:
        complaint = await db_manager.set_complaint_status(db, complaint_id, payload.status)
    except db_manager.ComplaintNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except db_manager.ComplaintStatusError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return ComplaintRead.model_validate(complaint)
