from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from underneath.api.error import ClientError, ServerError
from underneath.api.utils.roles import require_roles
from underneath.app.services.unit_of_work import UnitOfWork
from underneath.app.use_cases.stages import (
    CreateStageEntityCommand,
    CreateStageEntityUseCase,
    StageEntityResponse,
)
from underneath.depends import get_unit_of_work
from underneath.domain.entities import Priority, StageEntityKind, UserRole

router = APIRouter(tags=["Stage Entities"])

stage_managers = require_roles(UserRole.DOM, UserRole.ADMIN)


class StageRangeRequest(BaseModel):
    """Fields shared by task, rule and goal payloads"""

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    active_from_stage: int = Field(1, ge=0, description="First stage (inclusive)")
    active_to_stage: Optional[int] = Field(
        None, ge=0, description="Stage at which the entity stops (exclusive)"
    )


class CreateTaskRequest(StageRangeRequest):
    priority: Optional[Priority] = None
    points: Optional[int] = Field(None, ge=0)
    due_date: Optional[date] = None


class CreateRuleRequest(StageRangeRequest):
    severity: Optional[Priority] = None


class CreateGoalRequest(StageRangeRequest):
    points: Optional[int] = Field(None, ge=0)
    target_date: Optional[date] = None


async def _create(kind: StageEntityKind, request: StageRangeRequest, current_user: dict, uow):
    command = CreateStageEntityCommand(
        kind=kind, created_by_id=current_user["user_id"], **request.model_dump()
    )

    use_case = CreateStageEntityUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_STAGE_RANGE", "VALIDATION_FAILED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.post("/tasks", status_code=status.HTTP_201_CREATED, response_model=StageEntityResponse)
async def create_task(
    request: CreateTaskRequest,
    current_user: dict = Depends(stage_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Task

    Raises:
        - 400 Bad Request: INVALID_STAGE_RANGE (active_to_stage <= active_from_stage)
        - 403 Forbidden: Caller is neither DOM nor ADMIN
    """
    return await _create(StageEntityKind.task, request, current_user, uow)


@router.post("/rules", status_code=status.HTTP_201_CREATED, response_model=StageEntityResponse)
async def create_rule(
    request: CreateRuleRequest,
    current_user: dict = Depends(stage_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await _create(StageEntityKind.rule, request, current_user, uow)


@router.post("/goals", status_code=status.HTTP_201_CREATED, response_model=StageEntityResponse)
async def create_goal(
    request: CreateGoalRequest,
    current_user: dict = Depends(stage_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await _create(StageEntityKind.goal, request, current_user, uow)
