"""
Accept Invitation Use Case

A SUB redeems a code; the invitation is consumed and the DOM/SUB
connection is created in the same transaction.
"""

import logging
from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.app.use_cases.connections.views import connection_info_for
from underneath.domain.base import utcnow
from underneath.domain.entities import Connection, ConnectionStatus, UserRole
from underneath.domain.exceptions import ActiveConnectionExists
from underneath.domain.validation import is_valid_invitation_code
from underneath.result import Error, Result, Return

from .codes import redeemability_error
from .dtos import AcceptInvitationResponse

logger = logging.getLogger(__name__)

DOM_ALREADY_CONNECTED = Error(
    "DOM_ALREADY_CONNECTED", "This DOM is already connected to another SUB"
)
SUB_ALREADY_CONNECTED = Error(
    "SUB_ALREADY_CONNECTED", "This SUB is already connected to another DOM"
)


class AcceptInvitationUseCase:
    """
    Use case for redeeming invitation codes.

    Business Rules:
    - Unknown or malformed codes are rejected (INVALID_CODE)
    - Consumed and expired codes are rejected
    - Redeemer must be a SUB
    - Neither party may already hold an ACTIVE connection; the database's
      partial unique indexes re-check this at insert time
    - Invitation is consumed exactly once
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, code: str, sub_id: UUID) -> Result[AcceptInvitationResponse]:
        """
        Execute accept invitation use case.

        Args:
            code: Invitation code
            sub_id: ID of the redeeming SUB

        Returns:
            Result with AcceptInvitationResponse DTO, or Error
        """
        if not is_valid_invitation_code(code):
            return Return.err(Error("INVALID_CODE", "Invalid invitation code"))

        async with self.uow:
            invitation = await self.uow.invitations.get_by_code(code)
            if invitation is None:
                return Return.err(Error("INVALID_CODE", "Invalid invitation code"))

            now = utcnow()
            error = redeemability_error(invitation, now)
            if error:
                return Return.err(error)

            sub = await self.uow.users.get_by_id(sub_id)
            if sub is None or sub.role != UserRole.SUB:
                return Return.err(
                    Error("INVALID_SUB", "SUB user not found or invalid role")
                )

            dom_id = invitation.dom_id
            dom = await self.uow.users.get_by_id(dom_id)
            if dom is None or dom.role != UserRole.DOM:
                return Return.err(
                    Error("INVALID_DOM", "DOM user not found or invalid role")
                )

            if await self.uow.connections.get_active_by_dom(dom_id):
                return Return.err(DOM_ALREADY_CONNECTED)

            if await self.uow.connections.get_active_by_sub(sub_id):
                return Return.err(SUB_ALREADY_CONNECTED)

            invitation.is_active = False
            invitation.accepted_at = now
            invitation.accepted_by_id = sub_id
            await self.uow.invitations.update(invitation)

            try:
                connection = await self.uow.connections.create(
                    Connection(dom_id=dom_id, sub_id=sub_id, status=ConnectionStatus.ACTIVE)
                )
            except ActiveConnectionExists:
                # A concurrent redemption won; report which party is taken
                await self.uow.rollback()
                if await self.uow.connections.get_active_by_dom(dom_id):
                    return Return.err(DOM_ALREADY_CONNECTED)
                return Return.err(SUB_ALREADY_CONNECTED)

            await self.uow.commit()

            logger.info(f"Connection created: DOM {dom_id} <-> SUB {sub_id}")

            info = await connection_info_for(self.uow, connection, sub_id)

            return Return.ok(AcceptInvitationResponse(success=True, connection=info))
