# Importing the modules registers every table on Base.metadata
from db_models.asset import Asset, AssetCategory, AssetStatus
from db_models.verification_log import VerificationLog
from db_models.complaint import Complaint, ComplaintStatus
from db_models.user import User, UserRole

__all__ = [
    "Asset",
    "AssetCategory",
    "AssetStatus",
    "VerificationLog",
    "Complaint",
    "ComplaintStatus",
    "User",
    "UserRole",
]
