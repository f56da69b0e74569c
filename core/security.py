# core/security.py
"""
Password hashing (bcrypt) and signed access tokens (HS256 JWT).

Tokens are signed with `settings.SECRET_KEY`; every settings profile either
defines it or refuses to load without it.
"""
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from config import settings

ALGORITHM = "HS256"
TOKEN_TYPE = "access"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Sign `data` (``sub`` carries the user id) into a bearer token that expires
    after `expires_delta`, or ACCESS_TOKEN_EXPIRE_MINUTES by default.
    """
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        **data,
        "exp": datetime.now(timezone.utc) + lifetime,
        "type": TOKEN_TYPE,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict[str, Any] | None:
    """Claims of a valid, unexpired token; None for anything else."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
