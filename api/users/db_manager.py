# api/users/db_manager.py
"""
Business logic for user accounts.
"""
import logging
import uuid
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ConflictError, InvalidStateError, NotFoundError
from core.security import get_password_hash, verify_password
from db_models.asset import utcnow
from db_models.user import User, UserRole
from . import queries

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "designation", "phone", "email", "avatar_url", "is_active")


class UserNotFoundError(NotFoundError):
    """Raised when user doesn't exist"""
    pass


class DuplicateUsernameError(ConflictError):
    """Raised when the username is already taken"""
    pass


class InvalidRoleError(InvalidStateError):
    pass


class SelfDeletionError(InvalidStateError):
    """Raised when an admin tries to delete their own account"""
    pass


def new_user_id() -> str:
    return f"u-{uuid.uuid4().hex}"


def _check_role(role: str) -> str:
    allowed = [r.value for r in UserRole]
    if role not in allowed:
        raise InvalidRoleError(f"Invalid role. Must be one of: {allowed}")
    return role


async def get_user_or_raise(db: AsyncSession, user_id: str) -> User:
    result = await db.execute(queries.select_user_by_id(user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise UserNotFoundError(f"User {user_id} not found")
    return user


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(queries.select_user_by_username(username))
    return result.scalar_one_or_none()


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(queries.select_all_users())
    return list(result.scalars().all())


async def authenticate(db: AsyncSession, username: str, password: str) -> User | None:
    """
    Return the user when the credentials match, otherwise None. A matching
    but disabled account is returned too; callers decide how to reject it.
    """
    user = await get_user_by_username(db, username.strip())
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


async def record_login(db: AsyncSession, user: User) -> None:
    user.last_login_at = utcnow()
    await db.commit()


async def create_user(db: AsyncSession, data: dict[str, Any]) -> User:
    """
    Raises: DuplicateUsernameError, InvalidRoleError
    """
    username = data["username"].strip()
    if await get_user_by_username(db, username) is not None:
        raise DuplicateUsernameError(f"Username {username} is already taken")

    user = User(
        id=data.get("id") or new_user_id(),
        name=data["name"].strip(),
        username=username,
        hashed_password=get_password_hash(data["password"]),
        role=_check_role(data.get("role") or UserRole.STAFF.value),
        designation=data.get("designation"),
        phone=data.get("phone"),
        email=data.get("email"),
        avatar_url=data.get("avatar_url"),
        is_active=True,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise DuplicateUsernameError(f"User {user.id} or username {username} already exists") from exc
    await db.refresh(user)

    logger.info("User %s created (%s, %s)", user.id, user.username, user.role)
    return user


async def update_user(db: AsyncSession, user_id: str, changes: dict[str, Any]) -> User:
    """
    Partial update. A new password is re-hashed; the plain text is never stored.

    Raises: UserNotFoundError, DuplicateUsernameError, InvalidRoleError
    """
    user = await get_user_or_raise(db, user_id)

    if changes.get("username") is not None:
        username = changes["username"].strip()
        existing = await get_user_by_username(db, username)
        if existing is not None and existing.id != user.id:
            raise DuplicateUsernameError(f"Username {username} is already taken")
        user.username = username

    if changes.get("role") is not None:
        user.role = _check_role(changes["role"])

    if changes.get("password"):
        user.hashed_password = get_password_hash(changes["password"])

    for field in PROFILE_FIELDS:
        if field not in changes:
            continue
        # name and is_active are required columns; null means "leave as is"
        if changes[field] is None and field in ("name", "is_active"):
            continue
        setattr(user, field, changes[field])

    await db.commit()
    await db.refresh(user)

    logger.info("User %s updated", user_id)
    return user


async def delete_user(db: AsyncSession, user_id: str, acting_user_id: str) -> None:
    """
    Remove a user account. Verification logs and complaints keep the
    reporter/verifier names they were recorded with.

    Raises: UserNotFoundError, SelfDeletionError
    """
    if user_id == acting_user_id:
        logger.warning("User %s tried to delete their own account", user_id)
        raise SelfDeletionError("Cannot delete yourself")

    user = await get_user_or_raise(db, user_id)
    await db.delete(user)
    await db.commit()
    logger.info("User %s deleted", user_id)
