from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.result import Result, Return

from .dtos import MyConnectionResponse
from .views import connection_info_for


class GetMyConnectionUseCase:
    """The caller's ACTIVE connection, seen from their side"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[MyConnectionResponse]:
        async with self.uow:
            connection = await self.uow.connections.get_active_by_user(user_id)
            if connection is None:
                return Return.ok(MyConnectionResponse(has_connection=False))

            info = await connection_info_for(self.uow, connection, user_id)

            return Return.ok(
                MyConnectionResponse(has_connection=info is not None, connection=info)
            )
