"""
Create Invitation Use Case

A DOM issues a single-use code for a prospective SUB.
"""

import logging
from datetime import timedelta
from uuid import UUID

from config import ApplicationConfig
from underneath.app.services.email_sender import EmailSender
from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.base import utcnow
from underneath.domain.entities import Invitation, UserRole
from underneath.domain.validation import (
    is_valid_email,
    is_valid_invitation_code,
    validate_message,
)
from underneath.result import Error, Result, Return

from .codes import generate_invitation_code
from .dtos import CreateInvitationCommand, CreateInvitationResponse

logger = logging.getLogger(__name__)

MAX_CODE_ATTEMPTS = 10


class CreateInvitationUseCase:
    """
    Use case for creating invitations.

    Business Rules:
    - Only DOM users can invite
    - A DOM with an active connection cannot invite (one SUB per DOM)
    - One active invitation per DOM and email address
    - Code: 8 characters A-Z/0-9, regenerated on collision
    - Expires INVITATION_VALID_HOURS after creation unless overridden
    - Email is sent after commit; failure only clears email_sent
    """

    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(
        self, command: CreateInvitationCommand
    ) -> Result[CreateInvitationResponse]:
        """
        Execute create invitation use case.

        Args:
            command: DOM id, optional recipient email and message,
                optional validity in hours

        Returns:
            Result with CreateInvitationResponse DTO, or Error
        """
        dom_id = UUID(command.dom_id)
        email = (command.email or "").strip() or None
        message = command.message or None
        valid_hours = command.valid_hours
        if valid_hours is None:
            valid_hours = ApplicationConfig.INVITATION_VALID_HOURS

        violations = []
        if email is not None and not is_valid_email(email):
            violations.append("Invalid email format")
        if message is not None:
            violations.extend(validate_message(message).errors)
        if valid_hours <= 0:
            violations.append("Validity must be at least one hour")
        if violations:
            return Return.err(
                Error("VALIDATION_FAILED", "Invitation data is invalid", violations)
            )

        async with self.uow:
            dom = await self.uow.users.get_by_id(dom_id)
            if dom is None or dom.role != UserRole.DOM:
                return Return.err(
                    Error("NOT_A_DOM", "Only DOM users can create invitations")
                )

            if await self.uow.connections.get_active_by_dom(dom_id):
                return Return.err(
                    Error("DOM_ALREADY_CONNECTED", "You already have an active connection")
                )

            now = utcnow()
            if email is not None:
                pending = await self.uow.invitations.get_active_by_dom_and_email(
                    dom_id, email, now
                )
                if pending:
                    return Return.err(
                        Error(
                            "INVITATION_EXISTS",
                            "An active invitation already exists for this email",
                        )
                    )

            code = None
            for _ in range(MAX_CODE_ATTEMPTS):
                candidate = generate_invitation_code()
                if not is_valid_invitation_code(candidate):
                    continue
                if not await self.uow.invitations.code_exists(candidate):
                    code = candidate
                    break

            if code is None:
                return Return.err(
                    Error("CODE_GENERATION_FAILED", "Could not generate a unique code")
                )

            invitation = Invitation(
                code=code,
                dom_id=dom_id,
                email=email,
                message=message,
                expires_at=now + timedelta(hours=valid_hours),
            )
            invitation = await self.uow.invitations.create(invitation)

            await self.uow.commit()

            logger.info(f"Invitation created: {invitation.id} by DOM {dom_id}")

            response = CreateInvitationResponse(
                id=str(invitation.id),
                code=invitation.code,
                email=invitation.email,
                message=invitation.message,
                expires_at=invitation.expires_at.isoformat(),
                is_active=invitation.is_active,
                created_at=invitation.created_at.isoformat(),
                email_sent=False,
            )
            dom_name = dom.display_name or dom.email

        # Outside the transaction: the invitation stands even if mail fails
        if email is not None:
            try:
                response.email_sent = await self.email_sender.send_invitation_email(
                    email, code, dom_name, message
                )
            except Exception as e:
                logger.error(f"Invitation email to {email} failed: {e}")

        return Return.ok(response)
