"""
Award Points Use Case

A DOM awards (or deducts) points to the SUB of its active connection.
"""

import logging
from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.base import utcnow
from underneath.domain.entities import PointAccount, UserRole
from underneath.domain.validation import sanitize_input
from underneath.result import Error, Result, Return

from .dtos import AwardPointsCommand, AwardPointsResponse
from .views import progress_response

logger = logging.getLogger(__name__)


class AwardPointsUseCase:
    """
    Business Rules:
    - Caller must be a DOM with an ACTIVE connection
    - Points go to that connection's SUB
    - Zero awards are rejected
    - The total never drops below 0
    - The SUB's stage follows from the new total
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: AwardPointsCommand) -> Result[AwardPointsResponse]:
        if command.points == 0:
            return Return.err(
                Error("VALIDATION_FAILED", "Invalid input", ["Points must not be zero"])
            )

        dom_id = UUID(command.dom_id)
        reason = sanitize_input(command.reason) if command.reason else None

        async with self.uow:
            dom = await self.uow.users.get_by_id(dom_id)
            if dom is None or dom.role != UserRole.DOM:
                return Return.err(Error("NOT_A_DOM", "Only DOM users can award points"))

            connection = await self.uow.connections.get_active_by_dom(dom_id)
            if connection is None:
                return Return.err(
                    Error("NO_ACTIVE_CONNECTION", "No active connection found")
                )

            sub_id = connection.sub_id
            account = await self.uow.point_accounts.get_by_user_id(sub_id)
            if account is None:
                account = await self.uow.point_accounts.create(PointAccount(user_id=sub_id))

            account.total_points = max(0, account.total_points + command.points)
            account.updated_at = utcnow()
            account = await self.uow.point_accounts.update(account)
            total = account.total_points

            stages = await self.uow.stages.get_all()

            await self.uow.commit()

            logger.info(
                f"DOM {dom_id} awarded {command.points} points to SUB {sub_id} "
                f"(total {total})"
            )

            return Return.ok(
                AwardPointsResponse(
                    success=True,
                    awarded=command.points,
                    reason=reason,
                    progress=progress_response(sub_id, total, stages),
                )
            )
