# api/users/queries.py
from sqlalchemy import select

from db_models.user import User


def select_user_by_id(user_id: str):
    return select(User).where(User.id == user_id)


def select_user_by_username(username: str):
    return select(User).where(User.username == username)


def select_all_users():
    return select(User).order_by(User.created_at.desc(), User.id.desc())
