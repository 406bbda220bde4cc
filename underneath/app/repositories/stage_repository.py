from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from underneath.domain.entities import Stage


class IStageRepository(ABC):
    """Stage repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, stage_id: UUID) -> Optional[Stage]:
        """Get stage by ID"""
        pass

    @abstractmethod
    async def get_by_number(self, stage_number: int) -> Optional[Stage]:
        """Get stage by stage number"""
        pass

    @abstractmethod
    async def get_all(self) -> List[Stage]:
        """All stages ordered by stage_number ascending"""
        pass

    @abstractmethod
    async def get_sub_active(self) -> Optional[Stage]:
        """The stage currently flagged is_sub_active, if any"""
        pass

    @abstractmethod
    async def deactivate_sub_active_except(self, stage_id: UUID) -> int:
        """Clear is_sub_active on every other stage; returns rows changed"""
        pass

    @abstractmethod
    async def create(self, stage: Stage) -> Stage:
        """
        Create a new stage.

        Raises StageNumberExists when the stage_number is already taken.
        """
        pass

    @abstractmethod
    async def update(self, stage: Stage) -> Stage:
        """
        Update existing stage.

        Raises ActiveStageExists when the database rejects a second
        sub-active stage, StageNumberExists on a stage_number clash.
        """
        pass

    @abstractmethod
    async def delete(self, stage: Stage) -> None:
        """Delete a stage"""
        pass
