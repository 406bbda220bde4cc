"""
Stage Toggle Use Cases

Flip the SUB-facing flags of a stage.
"""

import logging
from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.base import utcnow
from underneath.domain.exceptions import ActiveStageExists
from underneath.result import Error, Result, Return

from .dtos import StageResponse
from .get_stage_use_case import STAGE_NOT_FOUND
from .views import stage_response

logger = logging.getLogger(__name__)


class ToggleSubActiveUseCase:
    """
    Use case for selecting the SUB's active stage.

    Business Rules:
    - At most one stage is sub-active system-wide
    - Turning a stage on turns every other stage off in the same transaction
    - Turning a stage off touches no other row
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, stage_id: UUID) -> Result[StageResponse]:
        async with self.uow:
            stage = await self.uow.stages.get_by_id(stage_id)
            if stage is None:
                return Return.err(STAGE_NOT_FOUND)

            activate = not stage.is_sub_active
            if activate:
                cleared = await self.uow.stages.deactivate_sub_active_except(stage.id)
                if cleared:
                    logger.info(f"Cleared sub-active flag on {cleared} other stage(s)")

            stage.is_sub_active = activate
            stage.updated_at = utcnow()

            try:
                stage = await self.uow.stages.update(stage)
            except ActiveStageExists:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        "STAGE_ACTIVATION_CONFLICT",
                        "Another stage was activated concurrently",
                    )
                )

            await self.uow.commit()

            logger.info(
                f"Stage {stage.stage_number} sub-active "
                f"{'enabled' if activate else 'disabled'}"
            )

            return Return.ok(stage_response(stage))


class ToggleSubVisibleUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, stage_id: UUID) -> Result[StageResponse]:
        async with self.uow:
            stage = await self.uow.stages.get_by_id(stage_id)
            if stage is None:
                return Return.err(STAGE_NOT_FOUND)

            stage.is_sub_visible = not stage.is_sub_visible
            stage.updated_at = utcnow()
            stage = await self.uow.stages.update(stage)
            await self.uow.commit()

            return Return.ok(stage_response(stage))


class ToggleSubLockedUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, stage_id: UUID) -> Result[StageResponse]:
        async with self.uow:
            stage = await self.uow.stages.get_by_id(stage_id)
            if stage is None:
                return Return.err(STAGE_NOT_FOUND)

            stage.is_sub_locked = not stage.is_sub_locked
            stage.updated_at = utcnow()
            stage = await self.uow.stages.update(stage)
            await self.uow.commit()

            return Return.ok(stage_response(stage))
