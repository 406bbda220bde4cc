from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.result import Result, Return

from .dtos import AvailabilityResponse
from .views import connection_info_for


class CheckAvailabilityUseCase:
    """Whether the user is free to enter a new connection"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[AvailabilityResponse]:
        async with self.uow:
            connection = await self.uow.connections.get_active_by_user(user_id)
            if connection is None:
                return Return.ok(
                    AvailabilityResponse(
                        can_create_connection=True, has_active_connection=False
                    )
                )

            return Return.ok(
                AvailabilityResponse(
                    can_create_connection=False,
                    has_active_connection=True,
                    current_connection=await connection_info_for(
                        self.uow, connection, user_id
                    ),
                )
            )
