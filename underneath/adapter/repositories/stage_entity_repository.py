from typing import Dict, List, Type

from sqlalchemy import func, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from underneath.app.repositories.stage_entity_repository import IStageEntityRepository
from underneath.domain.entities import (
    Goal,
    Rule,
    StageEntityKind,
    StageScopedEntity,
    Task,
)

MODELS: Dict[StageEntityKind, Type[StageScopedEntity]] = {
    StageEntityKind.task: Task,
    StageEntityKind.rule: Rule,
    StageEntityKind.goal: Goal,
}


class StageEntityRepository(IStageEntityRepository):
    """Task/rule/goal repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entity: StageScopedEntity) -> StageScopedEntity:
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def count_by_from_stage(self, kind: StageEntityKind) -> Dict[int, int]:
        model = MODELS[kind]
        stmt = select(model.active_from_stage, func.count(model.id)).group_by(
            model.active_from_stage
        )
        result = await self.session.exec(stmt)
        return {stage_number: count for stage_number, count in result.all()}

    async def get_visible_at(
        self, kind: StageEntityKind, stage_number: int
    ) -> List[StageScopedEntity]:
        model = MODELS[kind]
        stmt = (
            select(model)
            .where(
                model.active_from_stage <= stage_number,
                or_(
                    model.active_to_stage.is_(None),
                    model.active_to_stage > stage_number,
                ),
            )
            .order_by(model.active_from_stage, model.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
