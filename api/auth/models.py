# api/auth/models.py
"""
Pydantic models for authentication endpoints.
"""
from pydantic import Field

from api.users.models import UserRead
from core.schemas import ApiModel


class LoginRequest(ApiModel):
    """Login credentials."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(ApiModel):
    """Signed-in user plus the bearer token to send on later requests."""
    user: UserRead
    token: str
    token_type: str = "bearer"
