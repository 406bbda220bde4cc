"""
Stage Management Use Cases

Create, update, delete and seed stages.
"""

import logging
from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.base import utcnow
from underneath.domain.entities import Stage
from underneath.domain.exceptions import StageNumberExists
from underneath.result import Error, Result, Return

from .dtos import (
    CreateStageCommand,
    DeleteStageResponse,
    StageListResponse,
    StageResponse,
    UpdateStageCommand,
)
from .get_stage_use_case import STAGE_NOT_FOUND
from .views import stage_response

logger = logging.getLogger(__name__)

DEFAULT_STAGES = [
    {
        "stage_number": 0,
        "name": "Grundstufe",
        "description": "Ausgangspunkt jeder Verbindung",
        "points_required": 0,
    },
    {
        "stage_number": 1,
        "name": "Anfängerstufe",
        "description": "Erste Aufgaben, Regeln und Ziele",
        "points_required": 0,
    },
]


def stage_number_taken(stage_number: int) -> Error:
    return Error("STAGE_NUMBER_EXISTS", f"Stage number {stage_number} already exists")


class CreateStageUseCase:
    """
    Business Rules:
    - stage_number must be unique
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateStageCommand) -> Result[StageResponse]:
        async with self.uow:
            if await self.uow.stages.get_by_number(command.stage_number):
                return Return.err(stage_number_taken(command.stage_number))

            try:
                stage = await self.uow.stages.create(Stage(**command.model_dump()))
            except StageNumberExists:
                await self.uow.rollback()
                return Return.err(stage_number_taken(command.stage_number))

            await self.uow.commit()

            logger.info(f"Stage {stage.stage_number} created: {stage.id}")

            return Return.ok(stage_response(stage))


class UpdateStageUseCase:
    """
    Business Rules:
    - Only provided fields change
    - A new stage_number must not belong to another stage
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, stage_id: UUID, command: UpdateStageCommand
    ) -> Result[StageResponse]:
        changes = command.model_dump(exclude_none=True)

        async with self.uow:
            stage = await self.uow.stages.get_by_id(stage_id)
            if stage is None:
                return Return.err(STAGE_NOT_FOUND)

            new_number = changes.get("stage_number")
            if new_number is not None and new_number != stage.stage_number:
                if await self.uow.stages.get_by_number(new_number):
                    return Return.err(stage_number_taken(new_number))

            for field, value in changes.items():
                setattr(stage, field, value)
            stage.updated_at = utcnow()

            try:
                stage = await self.uow.stages.update(stage)
            except StageNumberExists:
                await self.uow.rollback()
                return Return.err(stage_number_taken(new_number))

            await self.uow.commit()

            return Return.ok(stage_response(stage))


class DeleteStageUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, stage_id: UUID) -> Result[DeleteStageResponse]:
        async with self.uow:
            stage = await self.uow.stages.get_by_id(stage_id)
            if stage is None:
                return Return.err(STAGE_NOT_FOUND)

            await self.uow.stages.delete(stage)
            await self.uow.commit()

            logger.info(f"Stage deleted: {stage_id}")

            return Return.ok(DeleteStageResponse(success=True, stage_id=str(stage_id)))


class InitializeDefaultStagesUseCase:
    """Seed stages 0 and 1 into an empty stage table"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[StageListResponse]:
        async with self.uow:
            if await self.uow.stages.get_all():
                return Return.err(
                    Error("STAGES_ALREADY_EXIST", "Stages have already been initialized")
                )

            created = []
            for values in DEFAULT_STAGES:
                created.append(await self.uow.stages.create(Stage(**values)))

            await self.uow.commit()

            logger.info(f"Initialized {len(created)} default stages")

            return Return.ok(StageListResponse(stages=[stage_response(s) for s in created]))
