"""
Refresh Token Use Case

Handles JWT token refresh with refresh token rotation.
"""

import secrets
from datetime import timedelta

from config import ApplicationConfig
from underneath.app.services.unit_of_work import UnitOfWork
from underneath.api.utils.jwt import generate_jwt
from underneath.domain.base import utcnow
from underneath.domain.entities import UserStatus
from underneath.result import Error, Result, Return

from .dtos import RefreshTokenResponse
from .tokens import hash_refresh_token


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT access tokens.

    Business Rules:
    - Refresh token rotation: old token invalidated, new token issued
    - Session must not be revoked or expired
    - User must still be active
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        async with self.uow:
            session = await self.uow.sessions.get_by_token_hash(
                hash_refresh_token(refresh_token)
            )

            if session is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid refresh token"))

            if session.revoked:
                return Return.err(Error("SESSION_REVOKED", "Session has been revoked"))

            if session.expires_at < utcnow():
                return Return.err(Error("SESSION_EXPIRED", "Session has expired"))

            user = await self.uow.users.get_by_id(session.user_id)
            if user is None or user.status != UserStatus.ACTIVE:
                return Return.err(Error("USER_INACTIVE", "User account is not active"))

            new_refresh_token = secrets.token_urlsafe(32)
            session.refresh_token_hash = hash_refresh_token(new_refresh_token)
            session.expires_at = utcnow() + timedelta(
                days=ApplicationConfig.REFRESH_TOKEN_DAYS
            )
            await self.uow.sessions.update(session)

            await self.uow.commit()

            return Return.ok(
                RefreshTokenResponse(
                    access_token=generate_jwt(user.id, user.role.value),
                    refresh_token=new_refresh_token,
                    session_id=str(session.id),
                )
            )
