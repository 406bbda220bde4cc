"""
Terminate Connection Use Case

Either party ends its ACTIVE connection. Termination is final;
a new connection requires a new invitation.
"""

import logging
from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.base import utcnow
from underneath.domain.entities import ConnectionStatus
from underneath.result import Error, Result, Return

from .dtos import TerminateConnectionResponse
from .views import terminated_connection

logger = logging.getLogger(__name__)


class TerminateConnectionUseCase:
    """
    Business Rules:
    - Caller must be a party of an ACTIVE connection
    - ACTIVE -> TERMINATED, recording who and when
    - A second call fails with NO_ACTIVE_CONNECTION
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[TerminateConnectionResponse]:
        async with self.uow:
            connection = await self.uow.connections.get_active_by_user(user_id)
            if connection is None:
                return Return.err(
                    Error("NO_ACTIVE_CONNECTION", "No active connection found")
                )

            now = utcnow()
            connection.status = ConnectionStatus.TERMINATED
            connection.terminated_at = now
            connection.terminated_by_id = user_id
            connection.updated_at = now
            connection = await self.uow.connections.update(connection)

            await self.uow.commit()

            logger.info(f"Connection terminated: {connection.id} by user {user_id}")

            return Return.ok(
                TerminateConnectionResponse(
                    success=True, connection=terminated_connection(connection)
                )
            )
