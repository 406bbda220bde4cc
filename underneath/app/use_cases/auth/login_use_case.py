"""
Login Use Case

Handles user authentication and returns JWT tokens.
"""

import bcrypt

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.api.utils.jwt import generate_jwt
from underneath.domain.base import utcnow
from underneath.domain.entities import UserStatus
from underneath.result import Error, Result, Return

from .register_dto import AuthResponse
from .tokens import new_session, user_info

# Hash used to keep the unknown-email path as slow as a real check
DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Same bcrypt cost whether or not the email exists
    - User must have status=ACTIVE
    - Creates new session with refresh token
    - Updates user.last_login_at
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, password: str) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with AuthResponse containing tokens, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                bcrypt.checkpw(password.encode(), DUMMY_HASH)
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not bcrypt.checkpw(password.encode(), user.password_hash.encode()):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if user.status != UserStatus.ACTIVE:
                return Return.err(Error("USER_INACTIVE", "User account is not active"))

            session, refresh_token = new_session(user)
            await self.uow.sessions.create(session)

            user.last_login_at = utcnow()
            await self.uow.users.update(user)

            await self.uow.commit()

            return Return.ok(
                AuthResponse(
                    user=user_info(user),
                    access_token=generate_jwt(user.id, user.role.value),
                    refresh_token=refresh_token,
                    session_id=str(session.id),
                )
            )
