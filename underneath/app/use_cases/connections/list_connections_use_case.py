from underneath.app.services.unit_of_work import UnitOfWork
from underneath.result import Error, Result, Return

from .dtos import ConnectionAdminInfo, ListConnectionsResponse
from .views import user_summary

MAX_LIMIT = 200


class ListConnectionsUseCase:
    """
    Admin listing of all connections, newest first.

    Business Rules:
    - limit must be 1..200, offset >= 0
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, limit: int = 50, offset: int = 0) -> Result[ListConnectionsResponse]:
        if limit < 1 or limit > MAX_LIMIT or offset < 0:
            return Return.err(
                Error(
                    "VALIDATION_FAILED",
                    f"limit must be between 1 and {MAX_LIMIT}, offset must be >= 0",
                )
            )

        async with self.uow:
            connections = await self.uow.connections.list_all(limit, offset)
            total = await self.uow.connections.count_all()

            items = []
            for connection in connections:
                dom = await self.uow.users.get_by_id(connection.dom_id)
                sub = await self.uow.users.get_by_id(connection.sub_id)
                items.append(
                    ConnectionAdminInfo(
                        id=str(connection.id),
                        status=connection.status.value,
                        created_at=connection.created_at.isoformat(),
                        updated_at=connection.updated_at.isoformat(),
                        dom=user_summary(dom),
                        sub=user_summary(sub),
                    )
                )

            return Return.ok(
                ListConnectionsResponse(
                    connections=items, limit=limit, offset=offset, total=total
                )
            )
