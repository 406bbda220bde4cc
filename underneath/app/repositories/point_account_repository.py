from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from underneath.domain.entities import PointAccount


class IPointAccountRepository(ABC):
    """Point account repository interface - application layer"""

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> Optional[PointAccount]:
        """Get the point account of a user"""
        pass

    @abstractmethod
    async def create(self, account: PointAccount) -> PointAccount:
        """Create a new point account"""
        pass

    @abstractmethod
    async def update(self, account: PointAccount) -> PointAccount:
        """Update existing point account"""
        pass
