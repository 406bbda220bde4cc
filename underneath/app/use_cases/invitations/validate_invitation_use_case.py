"""
Validate Invitation Use Case

Checks whether a code can still be redeemed, without consuming it.
"""

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.base import utcnow
from underneath.domain.validation import is_valid_invitation_code
from underneath.result import Error, Result, Return

from .codes import redeemability_error
from .dtos import InvitationSummary, ValidateInvitationResponse


class ValidateInvitationUseCase:
    """
    Business Rules:
    - Code must match ^[A-Z0-9]{8}$
    - Invitation must exist, be active and not be expired
    - Expiry is evaluated lazily against the current time
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, code: str) -> Result[ValidateInvitationResponse]:
        if not is_valid_invitation_code(code):
            return Return.err(Error("INVALID_CODE", "Malformed invitation code"))

        async with self.uow:
            invitation = await self.uow.invitations.get_by_code(code)
            if invitation is None:
                return Return.err(
                    Error("INVITATION_NOT_FOUND", "Invitation code does not exist")
                )

            error = redeemability_error(invitation, utcnow())
            if error:
                return Return.err(error)

            dom = await self.uow.users.get_by_id(invitation.dom_id)

            return Return.ok(
                ValidateInvitationResponse(
                    is_valid=True,
                    invitation=InvitationSummary(
                        code=invitation.code,
                        dom_id=str(invitation.dom_id),
                        dom_display_name=dom.display_name if dom else None,
                        email=invitation.email,
                        message=invitation.message,
                        expires_at=invitation.expires_at.isoformat(),
                    ),
                )
            )
