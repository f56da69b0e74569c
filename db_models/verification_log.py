# db_models/verification_log.py
from datetime import datetime

from sqlalchemy import String, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base


class VerificationLog(Base):
    """
    Append-only record that someone physically confirmed an asset.

    Rows are inserted once by the verification service and never updated or
    deleted. `asset_name` is a snapshot taken at verification time so the
    history stays readable after the asset is renamed or retired.
    """
    __tablename__ = "verification_logs"
    __table_args__ = (
        Index("ix_verification_logs_asset_timestamp", "asset_id", "timestamp"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    asset_id: Mapped[str] = mapped_column(
        ForeignKey("assets.id"),
        nullable=False,
        index=True,
    )

    asset_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Display name of whoever verified (not a user FK)
    verified_by: Mapped[str] = mapped_column(String(255), nullable=False)

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    asset: Mapped["Asset"] = relationship(
        "Asset",
        back_populates="verification_logs",
    )
