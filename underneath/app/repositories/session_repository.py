from abc import ABC, abstractmethod
from typing import Optional

from underneath.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """Get session by SHA-256 digest of its refresh token"""
        pass

    @abstractmethod
    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def update(self, session_obj: Session) -> Session:
        """Update existing session"""
        pass
