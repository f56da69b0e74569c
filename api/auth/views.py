# api/auth/views.py
"""
Authentication endpoints.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.users import db_manager as users_db
from api.users.models import UserRead
from core.deps import CurrentUser
from core.security import create_access_token
from db import get_session
from .models import LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=LoginResponse, summary="Login with username and password")
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_session),
) -> LoginResponse:
    """
    Exchange a username and password for a bearer token and the user's profile.
    """
    user = await users_db.authenticate(db, credentials.username, credentials.password)

    if user is None:
        logger.info("Failed login for %s", credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User account is disabled",
        )

    await users_db.record_login(db, user)

    token = create_access_token({"sub": user.id, "role": user.role})
    logger.info("User %s signed in", user.username)

    return LoginResponse(user=UserRead.model_validate(user), token=token)


@router.get("/me", response_model=UserRead, summary="Get current user")
async def get_me(current_user: CurrentUser) -> UserRead:
    """Get the current authenticated user's profile."""
    return UserRead.model_validate(current_user)
