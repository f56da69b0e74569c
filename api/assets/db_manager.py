# api/assets/db_manager.py
"""
Business logic for the asset lifecycle.

Every function that returns an asset returns it joined with its verification
logs and complaints (see `get_asset_detail`), so callers never have to fetch
history separately.
"""
import logging
from datetime import date
from enum import Enum
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.artifacts import build_qr_payload
from core.errors import ConflictError, InvalidStateError, NotFoundError
from db_models.asset import Asset, AssetCategory, AssetStatus, utcnow
from . import queries

logger = logging.getLogger(__name__)

ASSET_ID_PREFIX = "AST-"

# Generated ids can collide with a concurrent create; retry with a fresh one
MAX_CREATE_ATTEMPTS = 3

UPDATABLE_FIELDS = frozenset({
    "name",
    "category",
    "serial_number",
    "status",
    "location",
    "image_url",
    "added_by",
    "purchase_date",
    "created_date",
    "is_qr_generated",
    "qr_data",
})


class AssetNotFoundError(NotFoundError):
    """Raised when asset doesn't exist (or was deleted)"""
    pass


class DuplicateSerialError(ConflictError):
    """Raised when another asset already uses the serial number"""
    pass


class DuplicateAssetIdError(ConflictError):
    """Raised when a caller-supplied asset id is already taken"""
    pass


class InvalidAssetFieldError(InvalidStateError):
    """Raised when category or status is not one of the known values"""
    pass


def validate_choice(value: Any, choices: type[Enum], field: str) -> str:
    allowed = [c.value for c in choices]
    if value not in allowed:
        raise InvalidAssetFieldError(f"Invalid {field} {value!r}. Must be one of: {allowed}")
    return value


def _clean_serial(serial: str | None) -> str | None:
    if serial is None:
        return None
    serial = serial.strip()
    return serial or None


async def get_asset_or_raise(db: AsyncSession, asset_id: str) -> Asset:
    """Get a live asset by ID or raise AssetNotFoundError"""
    result = await db.execute(queries.select_asset_by_id(asset_id))
    asset = result.scalar_one_or_none()
    if asset is None:
        raise AssetNotFoundError(f"Asset {asset_id} not found")
    return asset


async def get_asset_detail(db: AsyncSession, asset_id: str) -> Asset:
    """Asset joined with its verification logs and complaints, newest first."""
    return await get_asset_or_raise(db, asset_id)


async def list_assets(db: AsyncSession) -> list[Asset]:
    """Return all live assets ordered by creation, newest first."""
    result = await db.execute(queries.select_all_assets())
    return list(result.scalars().all())


async def next_asset_id(db: AsyncSession) -> str:
    """Next free id in the AST-000001 sequence. Ids of deleted assets are never reused."""
    result = await db.execute(queries.select_asset_ids_with_prefix(ASSET_ID_PREFIX))
    highest = 0
    for existing_id in result.scalars():
        suffix = existing_id[len(ASSET_ID_PREFIX):]
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{ASSET_ID_PREFIX}{highest + 1:06d}"


async def _ensure_serial_free(db: AsyncSession, serial: str, asset_id: str | None = None) -> None:
    result = await db.execute(queries.select_asset_by_serial(serial))
    existing = result.scalar_one_or_none()
    if existing is not None and existing.id != asset_id:
        raise DuplicateSerialError(f"Serial number {serial} already registered to asset {existing.id}")


async def create_asset(db: AsyncSession, data: dict[str, Any]) -> Asset:
    """
    Register a new asset.

    Raises:
      - InvalidAssetFieldError for an unknown category or status
      - DuplicateSerialError / DuplicateAssetIdError on uniqueness violations
      - ValueError if the name is blank
    """
    name = (data.get("name") or "").strip()
    if not name:
        raise ValueError("Asset name must not be blank")

    category = validate_choice(data.get("category"), AssetCategory, "category")
    status = validate_choice(data.get("status") or AssetStatus.ACTIVE.value, AssetStatus, "status")

    serial = _clean_serial(data.get("serial_number"))
    if serial:
        await _ensure_serial_free(db, serial)

    requested_id = (data.get("id") or "").strip() or None
    if requested_id is not None:
        result = await db.execute(queries.select_asset_by_id(requested_id, include_deleted=True))
        if result.scalar_one_or_none() is not None:
            raise DuplicateAssetIdError(f"Asset with id {requested_id} already exists")

    for attempt in range(1, MAX_CREATE_ATTEMPTS + 1):
        asset_id = requested_id or await next_asset_id(db)
        asset = Asset(
            id=asset_id,
            name=name,
            category=category,
            serial_number=serial,
            status=status,
            location=data.get("location"),
            image_url=data.get("image_url"),
            added_by=data.get("added_by"),
            purchase_date=data.get("purchase_date"),
            created_date=data.get("created_date") or date.today(),
            is_qr_generated=bool(data.get("is_qr_generated", False)),
            qr_data=data.get("qr_data"),
        )
        db.add(asset)
        try:
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            if requested_id is None and attempt < MAX_CREATE_ATTEMPTS:
                logger.warning("Asset id %s taken concurrently, retrying", asset_id)
                continue
            raise ConflictError(f"Asset {asset_id} conflicts with an existing record") from exc
        break

    logger.info("Asset %s created (%s)", asset.id, asset.name)
    return await get_asset_detail(db, asset.id)


async def update_asset(db: AsyncSession, asset_id: str, changes: dict[str, Any]) -> Asset:
    """
    Apply a partial update. Identity, the verification summary and system
    timestamps are not writable here.

    Raises: AssetNotFoundError, InvalidAssetFieldError, DuplicateSerialError, ValueError
    """
    asset = await get_asset_or_raise(db, asset_id)
    changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}

    if "name" in changes:
        name = (changes["name"] or "").strip()
        if not name:
            raise ValueError("Asset name must not be blank")
        changes["name"] = name
    if "category" in changes:
        validate_choice(changes["category"], AssetCategory, "category")
    if "status" in changes:
        validate_choice(changes["status"], AssetStatus, "status")
    if "serial_number" in changes:
        changes["serial_number"] = _clean_serial(changes["serial_number"])
        if changes["serial_number"]:
            await _ensure_serial_free(db, changes["serial_number"], asset_id=asset.id)
    if changes.get("is_qr_generated") is None:
        changes.pop("is_qr_generated", None)

    for field, value in changes.items():
        setattr(asset, field, value)

    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise DuplicateSerialError(f"Serial number {changes.get('serial_number')} already registered") from exc

    logger.info("Asset %s updated (%s)", asset_id, ", ".join(sorted(changes)) or "no changes")
    return await get_asset_detail(db, asset_id)


async def delete_asset(db: AsyncSession, asset_id: str) -> None:
    """
    Soft-delete an asset. Its verification logs and complaints are retained
    as audit history and keep referencing the (hidden) asset row.
    """
    asset = await get_asset_or_raise(db, asset_id)
    asset.deleted_at = utcnow()
    await db.commit()
    logger.info("Asset %s deleted (history retained)", asset_id)


async def mark_qr_generated(db: AsyncSession, asset_id: str, base_url: str) -> Asset:
    """Record that an identity artifact was issued and store its exact payload."""
    asset = await get_asset_or_raise(db, asset_id)
    asset.qr_data = build_qr_payload(asset.id, base_url)
    asset.is_qr_generated = True
    await db.commit()
    logger.info("Identity artifact generated for asset %s", asset_id)
    return await get_asset_detail(db, asset_id)
