import logging
from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.base import utcnow
from underneath.domain.entities import ConnectionStatus
from underneath.result import Error, Result, Return

from .dtos import TerminateConnectionResponse
from .views import terminated_connection

logger = logging.getLogger(__name__)


class AdminTerminateConnectionUseCase:
    """
    Administrator ends any ACTIVE connection by ID.

    Business Rules:
    - Connection must exist (CONNECTION_NOT_FOUND)
    - Connection must be ACTIVE (CONNECTION_NOT_ACTIVE)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, connection_id: UUID, admin_id: UUID
    ) -> Result[TerminateConnectionResponse]:
        async with self.uow:
            connection = await self.uow.connections.get_by_id(connection_id)
            if connection is None:
                return Return.err(
                    Error("CONNECTION_NOT_FOUND", "Connection not found")
                )

            if connection.status != ConnectionStatus.ACTIVE:
                return Return.err(
                    Error("CONNECTION_NOT_ACTIVE", "Connection is not active")
                )

            now = utcnow()
            connection.status = ConnectionStatus.TERMINATED
            connection.terminated_at = now
            connection.terminated_by_id = admin_id
            connection.updated_at = now
            connection = await self.uow.connections.update(connection)

            await self.uow.commit()

            logger.info(f"Connection {connection_id} terminated by admin {admin_id}")

            return Return.ok(
                TerminateConnectionResponse(
                    success=True, connection=terminated_connection(connection)
                )
            )
