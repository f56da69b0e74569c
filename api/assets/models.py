# api/assets/models.py
"""
Wire shapes for assets and the history rows joined onto them.

`AssetRead` is the public shape of an asset everywhere in the API: it always
carries `verificationLogs` and `complaints`, newest first.
"""
import datetime as dt
from typing import Optional

from pydantic import Field, model_validator

from core.schemas import ApiModel, UtcDatetime


class VerificationLogRead(ApiModel):
    id: str
    asset_id: str
    asset_name: str
    verified_by: str
    timestamp: UtcDatetime


class ComplaintRead(ApiModel):
    id: str
    asset_id: str
    asset_name: str
    reported_by: str
    date: dt.date
    description: str
    status: str
    created_at: Optional[UtcDatetime] = None
    resolved_at: Optional[UtcDatetime] = None


class AssetRead(ApiModel):
    id: str
    name: str
    category: str
    serial_number: Optional[str] = None
    status: str
    location: Optional[str] = None
    image_url: Optional[str] = None
    added_by: Optional[str] = None
    purchase_date: Optional[dt.date] = None
    created_date: Optional[dt.date] = None
    last_verified_date: Optional[UtcDatetime] = None
    verified_by: Optional[str] = None
    is_qr_generated: bool = False
    qr_data: Optional[str] = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None

    verification_logs: list[VerificationLogRead] = Field(default_factory=list)
    complaints: list[ComplaintRead] = Field(default_factory=list)

    @model_validator(mode="after")
    def _summary_from_history(self) -> "AssetRead":
        # The verification summary is derived from the newest log on every read
        if self.verification_logs:
            newest = max(self.verification_logs, key=lambda log: log.timestamp)
            self.last_verified_date = newest.timestamp
            self.verified_by = newest.verified_by
        else:
            self.last_verified_date = None
            self.verified_by = None
        return self


class AssetCreate(ApiModel):
    id: Optional[str] = Field(None, max_length=32)
    name: str = Field(..., min_length=1, max_length=255)
    category: str
    serial_number: Optional[str] = Field(None, max_length=100)
    status: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    added_by: Optional[str] = None
    purchase_date: Optional[dt.date] = None
    created_date: Optional[dt.date] = None
    is_qr_generated: bool = False
    qr_data: Optional[str] = None


class AssetUpdate(ApiModel):
    """Partial update; only fields present in the request body are applied."""
    name: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = None
    serial_number: Optional[str] = Field(None, max_length=100)
    status: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    added_by: Optional[str] = None
    purchase_date: Optional[dt.date] = None
    created_date: Optional[dt.date] = None
    is_qr_generated: Optional[bool] = None
    qr_data: Optional[str] = None
