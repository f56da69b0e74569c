# api/users/views.py
"""
User management endpoints. Reads are open to any signed-in user so the
client can show who verified what; mutations are admin only.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.deps import AdminUser, CurrentUser
from core.schemas import MessageResponse
from db import get_session
from .models import UserCreate, UserRead, UserUpdate
from . import db_manager

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserRead], summary="List users")
async def list_users_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[UserRead]:
    users = await db_manager.list_users(db)
    return [UserRead.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserRead, summary="Get user by ID")
async def get_user_endpoint(
    user_id: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> UserRead:
    try:
        user = await db_manager.get_user_or_raise(db, user_id)
    except db_manager.UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    return UserRead.model_validate(user)


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create user (admin)",
)
async def create_user_endpoint(
    payload: UserCreate,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> UserRead:
    try:
        user = await db_manager.create_user(db, payload.model_dump())
    except db_manager.DuplicateUsernameError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except db_manager.InvalidRoleError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return UserRead.model_validate(user)


@router.put("/{user_id}", response_model=UserRead, summary="Update user (admin)")
async def update_user_endpoint(
    user_id: str,
    payload: UserUpdate,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> UserRead:
    try:
        user = await db_manager.update_user(db, user_id, payload.model_dump(exclude_unset=True))
    except db_manager.UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except db_manager.DuplicateUsernameError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except db_manager.InvalidRoleError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return UserRead.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse, summary="Delete user (admin)")
async def delete_user_endpoint(
    user_id: str,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    try:
        await db_manager.delete_user(db, user_id, acting_user_id=admin.id)
    except db_manager.SelfDeletionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except db_manager.UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    return MessageResponse(message="User deleted")
