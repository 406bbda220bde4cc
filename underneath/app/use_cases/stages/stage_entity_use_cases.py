"""
Stage Entity Use Cases

Tasks, rules and goals attached to stage ranges.
"""

import logging
from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.entities import Goal, Rule, StageEntityKind, Task
from underneath.domain.validation import sanitize_input
from underneath.result import Error, Result, Return

from .dtos import (
    CreateStageEntityCommand,
    EntityGroup,
    StageEntitiesResponse,
    StageEntityResponse,
)
from .get_stage_use_case import STAGE_NOT_FOUND
from .views import entity_response

logger = logging.getLogger(__name__)


def _build_entity(command: CreateStageEntityCommand, title: str, description):
    common = dict(
        title=title,
        description=description,
        active_from_stage=command.active_from_stage,
        active_to_stage=command.active_to_stage,
        created_by_id=UUID(command.created_by_id),
    )
    if command.kind == StageEntityKind.task:
        extra = dict(points=command.points or 0, due_date=command.due_date)
        if command.priority:
            extra["priority"] = command.priority
        return Task(**common, **extra)
    if command.kind == StageEntityKind.rule:
        return Rule(**common, **({"severity": command.severity} if command.severity else {}))
    return Goal(**common, points=command.points or 0, target_date=command.target_date)


class CreateStageEntityUseCase:
    """
    Business Rules:
    - active_to_stage, when given, must be greater than active_from_stage
    - Title and description are sanitized; an empty title is rejected
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateStageEntityCommand) -> Result[StageEntityResponse]:
        if (
            command.active_to_stage is not None
            and command.active_to_stage <= command.active_from_stage
        ):
            return Return.err(
                Error(
                    "INVALID_STAGE_RANGE",
                    "active_to_stage must be greater than active_from_stage",
                )
            )

        title = sanitize_input(command.title)
        if not title:
            return Return.err(
                Error("VALIDATION_FAILED", "Invalid input", ["Title is required"])
            )
        description = sanitize_input(command.description) if command.description else None

        async with self.uow:
            entity = await self.uow.stage_entities.create(
                _build_entity(command, title, description)
            )
            await self.uow.commit()

            logger.info(
                f"{command.kind.value.capitalize()} created: {entity.id} "
                f"(stages {entity.active_from_stage}..{entity.active_to_stage})"
            )

            return Return.ok(entity_response(command.kind, entity))


class GetStageEntitiesUseCase:
    """
    Entities visible at a stage, split into those introduced at it
    and those inherited from earlier stages.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, stage_number: int) -> Result[StageEntitiesResponse]:
        async with self.uow:
            if await self.uow.stages.get_by_number(stage_number) is None:
                return Return.err(STAGE_NOT_FOUND)

            groups = {}
            for kind in StageEntityKind:
                entities = await self.uow.stage_entities.get_visible_at(kind, stage_number)
                groups[kind] = EntityGroup(
                    direct=[
                        entity_response(kind, e)
                        for e in entities
                        if e.active_from_stage == stage_number
                    ],
                    inherited=[
                        entity_response(kind, e)
                        for e in entities
                        if e.is_inherited_at(stage_number)
                    ],
                )

            return Return.ok(
                StageEntitiesResponse(
                    stage_number=stage_number,
                    tasks=groups[StageEntityKind.task],
                    rules=groups[StageEntityKind.rule],
                    goals=groups[StageEntityKind.goal],
                )
            )
