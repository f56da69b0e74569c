# api/users/models.py
"""
Pydantic models for user management. Password hashes never leave the server.
"""
from typing import Optional

from pydantic import Field

from core.schemas import ApiModel, UtcDatetime

ROLE_PATTERN = "^(ADMIN|STAFF)$"


class UserRead(ApiModel):
    id: str
    name: str
    username: str
    role: str
    designation: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    is_active: bool = True
    created_at: Optional[UtcDatetime] = None
    last_login_at: Optional[UtcDatetime] = None


class UserCreate(ApiModel):
    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=6)
    role: str = Field(default="STAFF", pattern=ROLE_PATTERN)
    designation: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None


class UserUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[str] = Field(None, pattern=ROLE_PATTERN)
    designation: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    is_active: Optional[bool] = None
