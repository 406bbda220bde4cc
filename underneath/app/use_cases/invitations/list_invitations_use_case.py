from datetime import timedelta
from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.base import utcnow
from underneath.result import Result, Return

from .dtos import InvitationItem, ListInvitationsResponse

ACCEPTED_LOOKBACK = timedelta(days=30)


class ListInvitationsUseCase:
    """Active invitations of a DOM plus those accepted in the last 30 days"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, dom_id: UUID) -> Result[ListInvitationsResponse]:
        async with self.uow:
            now = utcnow()
            invitations = await self.uow.invitations.list_for_dom(
                dom_id, now - ACCEPTED_LOOKBACK
            )

            return Return.ok(
                ListInvitationsResponse(
                    invitations=[
                        InvitationItem(
                            id=str(inv.id),
                            code=inv.code,
                            email=inv.email,
                            message=inv.message,
                            is_active=inv.is_active,
                            is_expired=inv.is_expired(now),
                            expires_at=inv.expires_at.isoformat(),
                            created_at=inv.created_at.isoformat(),
                            accepted_at=inv.accepted_at.isoformat() if inv.accepted_at else None,
                        )
                        for inv in invitations
                    ]
                )
            )
