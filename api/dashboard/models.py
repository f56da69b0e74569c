# api/dashboard/models.py
"""
Pydantic models for dashboard responses.
"""
from core.schemas import ApiModel


class DashboardOverview(ApiModel):
    """Headline counts across all live assets."""
    total_assets: int
    by_status: dict[str, int]
    by_category: dict[str, int]
    verified_today: int
    pending_verification: int
    pending_complaints: int
