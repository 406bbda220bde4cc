from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.result import Error, Result, Return

from .dtos import MeResponse
from .tokens import user_info


class GetMeUseCase:
    """Load the authenticated user's profile summary"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[MeResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(MeResponse(user=user_info(user), status=user.status.value))
