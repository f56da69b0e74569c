# api/verification/models.py
from pydantic import Field

from api.assets.models import AssetRead, VerificationLogRead
from core.schemas import ApiModel


class VerifyRequest(ApiModel):
    verifier_name: str = Field(..., min_length=1, max_length=255)


class VerifyResponse(ApiModel):
    """The new log plus the asset re-read with its refreshed history."""
    message: str
    log: VerificationLogRead
    asset: AssetRead
