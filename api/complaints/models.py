# api/complaints/models.py
import datetime as dt
from typing import Optional

from pydantic import Field

from core.schemas import ApiModel


class ComplaintCreate(ApiModel):
    description: str = Field(..., min_length=1)
    reported_by: str = Field(..., min_length=1, max_length=255)
    date: Optional[dt.date] = None
    # Accepted for compatibility; only "Pending" is a valid initial status
    status: Optional[str] = None


class ComplaintStatusUpdate(ApiModel):
    status: str
