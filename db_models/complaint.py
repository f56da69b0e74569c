# db_models/complaint.py
import datetime as dt
from enum import Enum

from sqlalchemy import String, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base
from db_models.asset import utcnow


class ComplaintStatus(str, Enum):
    PENDING = "Pending"
    RESOLVED = "Resolved"


class Complaint(Base):
    __tablename__ = "complaints"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    asset_id: Mapped[str] = mapped_column(
        ForeignKey("assets.id"),
        nullable=False,
        index=True,
    )

    # Snapshot of the asset name when the complaint was filed
    asset_name: Mapped[str] = mapped_column(String(255), nullable=False)

    reported_by: Mapped[str] = mapped_column(String(255), nullable=False)

    # Business date of the report (attribute shadows the module name, hence `dt`)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Pending -> Resolved only
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ComplaintStatus.PENDING.value,
        server_default=ComplaintStatus.PENDING.value,
        index=True,
    )

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    resolved_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    asset: Mapped["Asset"] = relationship(
        "Asset",
        back_populates="complaints",
    )
