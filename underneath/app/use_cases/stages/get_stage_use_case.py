from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.result import Error, Result, Return

from .dtos import CurrentStageResponse, StageResponse
from .views import entity_counts, stage_response

STAGE_NOT_FOUND = Error("STAGE_NOT_FOUND", "Stage not found")


class GetStageUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, stage_id: UUID) -> Result[StageResponse]:
        async with self.uow:
            stage = await self.uow.stages.get_by_id(stage_id)
            if stage is None:
                return Return.err(STAGE_NOT_FOUND)

            return Return.ok(stage_response(stage, await entity_counts(self.uow)))


class GetStageByNumberUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, stage_number: int) -> Result[StageResponse]:
        async with self.uow:
            stage = await self.uow.stages.get_by_number(stage_number)
            if stage is None:
                return Return.err(STAGE_NOT_FOUND)

            return Return.ok(stage_response(stage, await entity_counts(self.uow)))


class GetCurrentStageUseCase:
    """The stage flagged as the SUB's active stage, if any"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[CurrentStageResponse]:
        async with self.uow:
            stage = await self.uow.stages.get_sub_active()
            if stage is None:
                return Return.ok(CurrentStageResponse())

            return Return.ok(
                CurrentStageResponse(
                    stage=stage_response(stage, await entity_counts(self.uow))
                )
            )
