# db_models/asset.py
from datetime import date, datetime, timezone
from enum import Enum

from sqlalchemy import String, Boolean, Date, DateTime, Text, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AssetCategory(str, Enum):
    LAPTOP = "Laptop"
    CAMERA = "Camera"
    MOBILE = "Mobile"
    TABLET = "Tablet"
    OTHER = "Other"


class AssetStatus(str, Enum):
    ACTIVE = "Active"
    MAINTENANCE = "Maintenance"
    RETIRED = "Retired"
    LOST = "Lost"


class Asset(Base):
    __tablename__ = "assets"

    # Human-legible identity, e.g. AST-000123
    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    category: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )

    serial_number: Mapped[str | None] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=True,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AssetStatus.ACTIVE.value,
        server_default=AssetStatus.ACTIVE.value,
    )

    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    added_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Business dates (editable)
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Denormalized copy of the newest VerificationLog
    last_verified_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    verified_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Identity artifact state
    is_qr_generated: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )
    qr_data: Mapped[str | None] = mapped_column(Text, nullable=True)

    # System timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    # Soft delete: history rows keep pointing at a real record
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )

    verification_logs: Mapped[list["VerificationLog"]] = relationship(
        "VerificationLog",
        back_populates="asset",
        lazy="selectin",
        order_by="VerificationLog.timestamp.desc()",
        passive_deletes="all",
    )
    complaints: Mapped[list["Complaint"]] = relationship(
        "Complaint",
        back_populates="asset",
        lazy="selectin",
        order_by="[Complaint.date.desc(), Complaint.created_at.desc()]",
        passive_deletes="all",
    )
