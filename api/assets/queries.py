# api/assets/queries.py
"""
SQLAlchemy query builders for asset records.
"""
from sqlalchemy import select

from db_models.asset import Asset


def select_asset_by_id(asset_id: str, include_deleted: bool = False):
    """
    Select an asset by ID with its history collections.

    `populate_existing` refreshes an instance already in the session so the
    joined collections reflect rows written earlier in the same session.
    """
    stmt = select(Asset).where(Asset.id == asset_id)
    if not include_deleted:
        stmt = stmt.where(Asset.deleted_at.is_(None))
    return stmt.execution_options(populate_existing=True)


def select_asset_for_update(asset_id: str):
    """Select a live asset and lock its row until the transaction ends."""
    return (
        select(Asset)
        .where(Asset.id == asset_id, Asset.deleted_at.is_(None))
        .with_for_update()
        .execution_options(populate_existing=True)
    )


def select_asset_by_serial(serial_number: str):
    """Serial numbers stay reserved after soft delete, so deleted rows count."""
    return select(Asset).where(Asset.serial_number == serial_number)


def select_all_assets():
    """Select live assets, newest first; `id` breaks ties deterministically."""
    return (
        select(Asset)
        .where(Asset.deleted_at.is_(None))
        .order_by(Asset.created_at.desc(), Asset.id.desc())
        .execution_options(populate_existing=True)
    )


def select_asset_ids_with_prefix(prefix: str):
    """Select every asset id (deleted included) that uses the generated prefix."""
    return select(Asset.id).where(Asset.id.like(f"{prefix}%"))
