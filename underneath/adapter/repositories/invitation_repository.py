from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from underneath.app.repositories.invitation_repository import IInvitationRepository
from underneath.domain.entities import Invitation


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        stmt = select(Invitation).where(Invitation.id == invitation_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_code(self, code: str) -> Optional[Invitation]:
        """Get invitation by code"""
        stmt = select(Invitation).where(Invitation.code == code)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def code_exists(self, code: str) -> bool:
        stmt = select(Invitation.id).where(Invitation.code == code)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def get_active_by_dom_and_email(
        self, dom_id: UUID, email: str, now: datetime
    ) -> Optional[Invitation]:
        """Get an active, unexpired invitation of a DOM for an email"""
        stmt = select(Invitation).where(
            Invitation.dom_id == dom_id,
            Invitation.email == email,
            Invitation.is_active == True,  # noqa: E712
            Invitation.expires_at > now,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_for_dom(self, dom_id: UUID, accepted_since: datetime) -> List[Invitation]:
        stmt = (
            select(Invitation)
            .where(
                Invitation.dom_id == dom_id,
                or_(
                    Invitation.is_active == True,  # noqa: E712
                    and_(
                        Invitation.accepted_at.is_not(None),
                        Invitation.accepted_at >= accepted_since,
                    ),
                ),
            )
            .order_by(Invitation.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation
