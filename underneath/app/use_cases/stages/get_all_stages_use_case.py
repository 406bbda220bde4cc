from underneath.app.services.unit_of_work import UnitOfWork
from underneath.result import Result, Return

from .dtos import StageListResponse
from .views import entity_counts, stage_response


class GetAllStagesUseCase:
    """All stages by stage_number, with task/rule/goal counts"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[StageListResponse]:
        async with self.uow:
            stages = await self.uow.stages.get_all()
            counts = await entity_counts(self.uow)

            return Return.ok(
                StageListResponse(stages=[stage_response(s, counts) for s in stages])
            )
