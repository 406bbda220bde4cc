from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from underneath.domain.entities import Connection


class IConnectionRepository(ABC):
    """Connection repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, connection_id: UUID) -> Optional[Connection]:
        """Get connection by ID"""
        pass

    @abstractmethod
    async def get_active_by_user(self, user_id: UUID) -> Optional[Connection]:
        """Get the ACTIVE connection the user takes part in, as DOM or SUB"""
        pass

    @abstractmethod
    async def get_active_by_dom(self, dom_id: UUID) -> Optional[Connection]:
        """Get the ACTIVE connection of a DOM"""
        pass

    @abstractmethod
    async def get_active_by_sub(self, sub_id: UUID) -> Optional[Connection]:
        """Get the ACTIVE connection of a SUB"""
        pass

    @abstractmethod
    async def list_all(self, limit: int, offset: int) -> List[Connection]:
        """List connections, newest first"""
        pass

    @abstractmethod
    async def count_all(self) -> int:
        """Total number of connections"""
        pass

    @abstractmethod
    async def create(self, connection: Connection) -> Connection:
        """
        Create a new connection.

        Raises ActiveConnectionExists when the database rejects a second
        ACTIVE connection for either party.
        """
        pass

    @abstractmethod
    async def update(self, connection: Connection) -> Connection:
        """Update existing connection"""
        pass
