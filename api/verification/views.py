# api/verification/views.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.assets.models import AssetRead, VerificationLogRead
from core.deps import CurrentUser
from db import get_session
from .models import VerifyRequest, VerifyResponse
from . import db_manager

# Asset-focused router
router = APIRouter(
    prefix="/assets",
    tags=["verification"],
)


@router.post(
    "/{asset_id}/verify",
    response_model=VerifyResponse,
    summary="Record a physical verification of an asset",
)
async def verify_asset_endpoint(
    asset_id: str,
    payload: VerifyRequest,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> VerifyResponse:
    """
    Appends a verification log and returns it together with the updated
    asset, whose `lastVerifiedDate`/`verifiedBy` match the new log.
    """
    try:
        log, asset = await db_manager.record_verification(db, asset_id, payload.verifier_name)
    except db_manager.AssetNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return VerifyResponse(
        message="Asset verified",
        log=VerificationLogRead.model_validate(log),
        asset=AssetRead.model_validate(asset),
    )


# --- Audit trail across assets ---
verification_router = APIRouter(
    prefix="/verification",
    tags=["verification"],
)


@verification_router.get(
    "/logs",
    response_model=list[VerificationLogRead],
    summary="List verification logs, newest first",
)
async def list_logs_endpoint(
    current_user: CurrentUser,
    asset_id: str | None = Query(None, alias="assetId", description="Only logs for this asset"),
    limit: int | None = Query(None, ge=1, le=1000),
    db: AsyncSession = Depends(get_session),
) -> list[VerificationLogRead]:
    logs = await db_manager.list_logs(db, asset_id=asset_id, limit=limit)
    return [VerificationLogRead.model_validate(log) for log in logs]
