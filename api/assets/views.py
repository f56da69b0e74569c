# api/assets/views.py
"""
Asset lifecycle endpoints. Every asset in a response is joined with its
verification logs and complaints.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.artifacts import build_qr_payload, render_identity_artifact
from core.deps import AdminUser, CurrentUser
from core.errors import ConflictError, InvalidStateError
from core.schemas import MessageResponse
from db import get_session
from .models import AssetCreate, AssetRead, AssetUpdate
from . import db_manager

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get(
    "",
    response_model=list[AssetRead],
    summary="List assets with their verification logs and complaints",
)
async def list_assets_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[AssetRead]:
    """
    List all assets, newest first. Each asset carries its full history.
    """
    assets = await db_manager.list_assets(db)
    return [AssetRead.model_validate(a) for a in assets]


@router.post(
    "",
    response_model=AssetRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register an asset",
)
async def create_asset_endpoint(
    payload: AssetCreate,
    admin: AdminUser,  # Only admins register assets
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    """
    Create an asset. An id like AST-000123 is assigned when none is given.
    """
    try:
        asset = await db_manager.create_asset(db, payload.model_dump(exclude_unset=True))
    except InvalidStateError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return AssetRead.model_validate(asset)


@router.get(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Get an asset with its verification logs and complaints",
)
async def get_asset_endpoint(
    asset_id: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    try:
        asset = await db_manager.get_asset_detail(db, asset_id)
    except db_manager.AssetNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return AssetRead.model_validate(asset)


@router.put(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Update an asset",
)
async def update_asset_endpoint(
    asset_id: str,
    payload: AssetUpdate,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    """
    Partial update. Verification fields are maintained by the verify action
    and cannot be set here.
    """
    try:
        asset = await db_manager.update_asset(db, asset_id, payload.model_dump(exclude_unset=True))
    except db_manager.AssetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except InvalidStateError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return AssetRead.model_validate(asset)


@router.delete(
    "/{asset_id}",
    response_model=MessageResponse,
    summary="Delete an asset (history is kept)",
)
async def delete_asset_endpoint(
    asset_id: str,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """
    Remove an asset from listings. Its verification logs and complaints
    remain stored for audit.
    """
    try:
        await db_manager.delete_asset(db, asset_id)
    except db_manager.AssetNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return MessageResponse(message="Asset deleted")


# --- Identity artifact ---
@router.post(
    "/{asset_id}/qr",
    response_model=AssetRead,
    summary="Generate the QR identity artifact for an asset",
)
async def generate_qr_endpoint(
    asset_id: str,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    """
    Marks the asset as carrying a QR label and stores the embedded payload.
    Download the printable card from `/assets/{asset_id}/qr.pdf`.
    """
    try:
        asset = await db_manager.mark_qr_generated(db, asset_id, settings.PUBLIC_BASE_URL)
    except db_manager.AssetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    return AssetRead.model_validate(asset)


@router.get(
    "/{asset_id}/qr.pdf",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
    summary="Download the printable asset card",
)
async def download_qr_card_endpoint(
    asset_id: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> Response:
    try:
        asset = await db_manager.get_asset_detail(db, asset_id)
    except db_manager.AssetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    payload = asset.qr_data or build_qr_payload(asset.id, settings.PUBLIC_BASE_URL)
    # Image rendering is CPU bound; keep it off the event loop
    content = await run_in_threadpool(render_identity_artifact, asset, payload)

    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="QR_{asset.id}.pdf"'},
    )
