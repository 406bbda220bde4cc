from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.base import utcnow
from underneath.result import Result, Return

from .dtos import LogoutResponse
from .tokens import hash_refresh_token


class LogoutUseCase:
    """Revoke the session behind a refresh token. Unknown tokens succeed too."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: str) -> Result[LogoutResponse]:
        async with self.uow:
            session = await self.uow.sessions.get_by_token_hash(
                hash_refresh_token(refresh_token)
            )

            if session is not None and not session.revoked:
                session.revoked = True
                session.revoked_at = utcnow()
                await self.uow.sessions.update(session)
                await self.uow.commit()

            return Return.ok(LogoutResponse(status="logged_out"))
