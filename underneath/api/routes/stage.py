from uuid import UUID

from fastapi import APIRouter, Depends, status

from underneath.api.error import ClientError, ServerError
from underneath.api.utils.roles import require_roles
from underneath.app.services.unit_of_work import UnitOfWork
from underneath.app.use_cases.stages import (
    CreateStageCommand,
    CreateStageUseCase,
    CurrentStageResponse,
    DeleteStageResponse,
    DeleteStageUseCase,
    GetAllStagesUseCase,
    GetCurrentStageUseCase,
    GetStageByNumberUseCase,
    GetStageEntitiesUseCase,
    GetStageUseCase,
    InitializeDefaultStagesUseCase,
    StageEntitiesResponse,
    StageListResponse,
    StageResponse,
    ToggleSubActiveUseCase,
    ToggleSubLockedUseCase,
    ToggleSubVisibleUseCase,
    UpdateStageCommand,
    UpdateStageUseCase,
)
from underneath.depends import get_current_user, get_unit_of_work
from underneath.domain.entities import UserRole
from underneath.result import Result

router = APIRouter(prefix="/stages", tags=["Stages"])

stage_managers = require_roles(UserRole.DOM, UserRole.ADMIN)


def _stage_result(result: Result):
    """Shared error mapping for single-stage operations"""
    if result.is_err():
        error = result.error
        if error.code == "STAGE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in (
            "STAGE_NUMBER_EXISTS",
            "STAGES_ALREADY_EXIST",
            "STAGE_ACTIVATION_CONFLICT",
        ):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=StageListResponse)
async def get_all_stages(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """All stages by stage number, with counts of tasks, rules and goals"""
    use_case = GetAllStagesUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/current", status_code=status.HTTP_200_OK, response_model=CurrentStageResponse)
async def get_current_stage(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """The stage currently active for the SUB, or null"""
    use_case = GetCurrentStageUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/number/{stage_number}", status_code=status.HTTP_200_OK, response_model=StageResponse)
async def get_stage_by_number(
    stage_number: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = GetStageByNumberUseCase(uow)
    return _stage_result(await use_case.execute(stage_number))


@router.get(
    "/number/{stage_number}/entities",
    status_code=status.HTTP_200_OK,
    response_model=StageEntitiesResponse,
)
async def get_stage_entities(
    stage_number: int,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Tasks, rules and goals visible at a stage

    Each kind is split into entities introduced at the stage (direct)
    and entities carried in from earlier stages (inherited).

    Raises:
        - 404 Not Found: STAGE_NOT_FOUND
    """
    use_case = GetStageEntitiesUseCase(uow)
    return _stage_result(await use_case.execute(stage_number))


@router.get("/{stage_id}", status_code=status.HTTP_200_OK, response_model=StageResponse)
async def get_stage(
    stage_id: UUID,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = GetStageUseCase(uow)
    return _stage_result(await use_case.execute(stage_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=StageResponse)
async def create_stage(
    request: CreateStageCommand,
    current_user: dict = Depends(stage_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Stage

    Raises:
        - 403 Forbidden: Caller is neither DOM nor ADMIN
        - 409 Conflict: STAGE_NUMBER_EXISTS
    """
    use_case = CreateStageUseCase(uow)
    return _stage_result(await use_case.execute(request))


@router.post("/initialize", status_code=status.HTTP_201_CREATED, response_model=StageListResponse)
async def initialize_default_stages(
    current_user: dict = Depends(stage_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Seed the default stages into an empty stage table

    Raises:
        - 409 Conflict: STAGES_ALREADY_EXIST
    """
    use_case = InitializeDefaultStagesUseCase(uow)
    return _stage_result(await use_case.execute())


@router.put("/{stage_id}", status_code=status.HTTP_200_OK, response_model=StageResponse)
async def update_stage(
    stage_id: UUID,
    request: UpdateStageCommand,
    current_user: dict = Depends(stage_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Stage

    Only fields present in the body change.

    Raises:
        - 404 Not Found: STAGE_NOT_FOUND
        - 409 Conflict: STAGE_NUMBER_EXISTS
    """
    use_case = UpdateStageUseCase(uow)
    return _stage_result(await use_case.execute(stage_id, request))


@router.delete("/{stage_id}", status_code=status.HTTP_200_OK, response_model=DeleteStageResponse)
async def delete_stage(
    stage_id: UUID,
    current_user: dict = Depends(stage_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = DeleteStageUseCase(uow)
    return _stage_result(await use_case.execute(stage_id))


@router.patch("/{stage_id}/toggle-active", status_code=status.HTTP_200_OK, response_model=StageResponse)
async def toggle_sub_active(
    stage_id: UUID,
    current_user: dict = Depends(stage_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Toggle Sub-Active Stage

    Activating a stage deactivates every other stage.

    Raises:
        - 404 Not Found: STAGE_NOT_FOUND
        - 409 Conflict: STAGE_ACTIVATION_CONFLICT (concurrent activation)
    """
    use_case = ToggleSubActiveUseCase(uow)
    return _stage_result(await use_case.execute(stage_id))


@router.patch("/{stage_id}/toggle-visible", status_code=status.HTTP_200_OK, response_model=StageResponse)
async def toggle_sub_visible(
    stage_id: UUID,
    current_user: dict = Depends(stage_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = ToggleSubVisibleUseCase(uow)
    return _stage_result(await use_case.execute(stage_id))


@router.patch("/{stage_id}/toggle-locked", status_code=status.HTTP_200_OK, response_model=StageResponse)
async def toggle_sub_locked(
    stage_id: UUID,
    current_user: dict = Depends(stage_managers),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = ToggleSubLockedUseCase(uow)
    return _stage_result(await use_case.execute(stage_id))
