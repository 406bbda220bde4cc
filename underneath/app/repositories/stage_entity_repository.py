from abc import ABC, abstractmethod
from typing import Dict, List

from underneath.domain.entities import StageEntityKind, StageScopedEntity


class IStageEntityRepository(ABC):
    """Repository for tasks, rules and goals - application layer"""

    @abstractmethod
    async def create(self, entity: StageScopedEntity) -> StageScopedEntity:
        """Create a task, rule or goal"""
        pass

    @abstractmethod
    async def count_by_from_stage(self, kind: StageEntityKind) -> Dict[int, int]:
        """Number of entities of a kind per active_from_stage"""
        pass

    @abstractmethod
    async def get_visible_at(
        self, kind: StageEntityKind, stage_number: int
    ) -> List[StageScopedEntity]:
        """Entities of a kind visible at the stage, direct and inherited"""
        pass
