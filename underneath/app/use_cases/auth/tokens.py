import hashlib
import secrets
from datetime import timedelta

from config import ApplicationConfig
from underneath.domain.base import utcnow
from underneath.domain.entities import Session, User

from .register_dto import UserInfo


def hash_refresh_token(refresh_token: str) -> str:
    return hashlib.sha256(refresh_token.encode("utf-8")).hexdigest()


def new_session(user: User) -> tuple[Session, str]:
    """Build a session for the user; returns it with the plain refresh token"""
    refresh_token = secrets.token_urlsafe(32)
    session = Session(
        user_id=user.id,
        refresh_token_hash=hash_refresh_token(refresh_token),
        expires_at=utcnow() + timedelta(days=ApplicationConfig.REFRESH_TOKEN_DAYS),
    )
    return session, refresh_token


def user_info(user: User) -> UserInfo:
    return UserInfo(
        id=str(user.id),
        email=user.email,
        role=user.role.value,
        display_name=user.display_name,
    )
