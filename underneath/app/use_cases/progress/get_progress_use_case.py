from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.result import Error, Result, Return

from .dtos import ProgressResponse
from .views import progress_response


class GetProgressUseCase:
    """
    Current points and stage of a user.

    Users without a point account (DOM, OBSERVER, ADMIN) report 0 points.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[ProgressResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            account = await self.uow.point_accounts.get_by_user_id(user_id)
            total = account.total_points if account else 0
            stages = await self.uow.stages.get_all()

            return Return.ok(progress_response(user_id, total, stages))
