from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from underneath.domain.entities import Invitation


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[Invitation]:
        """Get invitation by code"""
        pass

    @abstractmethod
    async def code_exists(self, code: str) -> bool:
        """True if any invitation (active or not) already uses the code"""
        pass

    @abstractmethod
    async def get_active_by_dom_and_email(
        self, dom_id: UUID, email: str, now: datetime
    ) -> Optional[Invitation]:
        """Get an active, unexpired invitation of a DOM for an email"""
        pass

    @abstractmethod
    async def list_for_dom(self, dom_id: UUID, accepted_since: datetime) -> List[Invitation]:
        """Active invitations plus those accepted since the given time, newest first"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        """Update existing invitation"""
        pass
