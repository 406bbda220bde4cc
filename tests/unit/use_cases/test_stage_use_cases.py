from uuid import uuid4

import pytest

from tests.unit.factories import make_stage
from underneath.app.use_cases.stages import (
    CreateStageCommand,
    CreateStageEntityCommand,
    CreateStageEntityUseCase,
    CreateStageUseCase,
    DeleteStageUseCase,
    GetAllStagesUseCase,
    GetCurrentStageUseCase,
    GetStageEntitiesUseCase,
    InitializeDefaultStagesUseCase,
    ToggleSubActiveUseCase,
    ToggleSubLockedUseCase,
    ToggleSubVisibleUseCase,
    UpdateStageCommand,
    UpdateStageUseCase,
)
from underneath.domain.entities import Rule, StageEntityKind, Task
from underneath.domain.exceptions import ActiveStageExists, StageNumberExists


@pytest.mark.asyncio
async def test_get_all_stages_with_counts(mock_uow):
    mock_uow.stages.get_all.return_value = [make_stage(0), make_stage(1, 100)]
    counts = {
        StageEntityKind.task: {1: 3},
        StageEntityKind.rule: {0: 1, 1: 2},
        StageEntityKind.goal: {},
    }
    mock_uow.stage_entities.count_by_from_stage.side_effect = lambda kind: counts[kind]

    result = await GetAllStagesUseCase(mock_uow).execute()

    assert result.is_ok()
    first, second = result.value.stages
    assert (first.stage_number, first.task_count, first.rule_count) == (0, 0, 1)
    assert (second.stage_number, second.task_count, second.rule_count, second.goal_count) == (1, 3, 2, 0)


@pytest.mark.asyncio
async def test_toggle_sub_active_on_clears_others(mock_uow):
    stage = make_stage(2)
    mock_uow.stages.get_by_id.return_value = stage
    mock_uow.stages.deactivate_sub_active_except.return_value = 1

    result = await ToggleSubActiveUseCase(mock_uow).execute(stage.id)

    assert result.is_ok()
    assert result.value.is_sub_active is True
    mock_uow.stages.deactivate_sub_active_except.assert_awaited_once_with(stage.id)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_toggle_sub_active_off_touches_no_other_row(mock_uow):
    stage = make_stage(2, is_sub_active=True)
    mock_uow.stages.get_by_id.return_value = stage

    result = await ToggleSubActiveUseCase(mock_uow).execute(stage.id)

    assert result.is_ok()
    assert result.value.is_sub_active is False
    mock_uow.stages.deactivate_sub_active_except.assert_not_called()


@pytest.mark.asyncio
async def test_toggle_sub_active_conflict(mock_uow):
    stage = make_stage(2)
    mock_uow.stages.get_by_id.return_value = stage
    mock_uow.stages.deactivate_sub_active_except.return_value = 0
    mock_uow.stages.update.side_effect = ActiveStageExists("unique")

    result = await ToggleSubActiveUseCase(mock_uow).execute(stage.id)

    assert result.is_err()
    assert result.error.code == "STAGE_ACTIVATION_CONFLICT"
    mock_uow.rollback.assert_called_once()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_toggle_visible_and_locked_flip_single_flag(mock_uow):
    stage = make_stage(1)
    mock_uow.stages.get_by_id.return_value = stage

    visible = (await ToggleSubVisibleUseCase(mock_uow).execute(stage.id)).value
    assert visible.is_sub_visible is False

    locked = (await ToggleSubLockedUseCase(mock_uow).execute(stage.id)).value
    assert locked.is_sub_locked is True
    assert locked.is_sub_active is False


@pytest.mark.asyncio
async def test_toggles_report_missing_stage(mock_uow):
    mock_uow.stages.get_by_id.return_value = None

    for use_case in (ToggleSubActiveUseCase, ToggleSubVisibleUseCase, ToggleSubLockedUseCase):
        result = await use_case(mock_uow).execute(uuid4())
        assert result.error.code == "STAGE_NOT_FOUND"


@pytest.mark.asyncio
async def test_create_stage_rejects_duplicate_number(mock_uow):
    mock_uow.stages.get_by_number.return_value = make_stage(1)

    result = await CreateStageUseCase(mock_uow).execute(
        CreateStageCommand(stage_number=1, name="Again")
    )

    assert result.is_err()
    assert result.error.code == "STAGE_NUMBER_EXISTS"


@pytest.mark.asyncio
async def test_create_stage(mock_uow):
    mock_uow.stages.get_by_number.return_value = None

    result = await CreateStageUseCase(mock_uow).execute(
        CreateStageCommand(stage_number=3, name="Fortgeschritten", points_required=300)
    )

    assert result.is_ok()
    assert result.value.stage_number == 3
    assert result.value.points_required == 300
    assert result.value.is_sub_visible is True


@pytest.mark.asyncio
async def test_update_stage_changes_only_given_fields(mock_uow):
    stage = make_stage(1, 100, description="keep me")
    mock_uow.stages.get_by_id.return_value = stage

    result = await UpdateStageUseCase(mock_uow).execute(
        stage.id, UpdateStageCommand(name="Renamed")
    )

    assert result.is_ok()
    assert result.value.name == "Renamed"
    assert result.value.description == "keep me"
    assert result.value.points_required == 100


@pytest.mark.asyncio
async def test_update_stage_number_collision(mock_uow):
    stage = make_stage(1)
    mock_uow.stages.get_by_id.return_value = stage
    mock_uow.stages.get_by_number.return_value = make_stage(2)

    result = await UpdateStageUseCase(mock_uow).execute(
        stage.id, UpdateStageCommand(stage_number=2)
    )

    assert result.error.code == "STAGE_NUMBER_EXISTS"


@pytest.mark.asyncio
async def test_update_stage_number_lost_race(mock_uow):
    stage = make_stage(1)
    mock_uow.stages.get_by_id.return_value = stage
    mock_uow.stages.get_by_number.return_value = None
    mock_uow.stages.update.side_effect = StageNumberExists("unique")

    result = await UpdateStageUseCase(mock_uow).execute(
        stage.id, UpdateStageCommand(stage_number=2)
    )

    assert result.is_err()
    assert result.error.code == "STAGE_NUMBER_EXISTS"
    mock_uow.rollback.assert_called_once()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_create_stage_number_lost_race(mock_uow):
    mock_uow.stages.get_by_number.return_value = None
    mock_uow.stages.create.side_effect = StageNumberExists("unique")

    result = await CreateStageUseCase(mock_uow).execute(
        CreateStageCommand(stage_number=5, name="Late")
    )

    assert result.error.code == "STAGE_NUMBER_EXISTS"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_delete_stage(mock_uow):
    stage = make_stage(4)
    mock_uow.stages.get_by_id.return_value = stage

    result = await DeleteStageUseCase(mock_uow).execute(stage.id)

    assert result.value.success is True
    mock_uow.stages.delete.assert_awaited_once_with(stage)


@pytest.mark.asyncio
async def test_initialize_default_stages(mock_uow):
    mock_uow.stages.get_all.return_value = []

    result = await InitializeDefaultStagesUseCase(mock_uow).execute()

    assert result.is_ok()
    names = [(s.stage_number, s.name, s.points_required) for s in result.value.stages]
    assert names == [(0, "Grundstufe", 0), (1, "Anfängerstufe", 0)]


@pytest.mark.asyncio
async def test_initialize_refuses_when_stages_exist(mock_uow):
    mock_uow.stages.get_all.return_value = [make_stage(0)]

    result = await InitializeDefaultStagesUseCase(mock_uow).execute()

    assert result.error.code == "STAGES_ALREADY_EXIST"
    mock_uow.stages.create.assert_not_called()


@pytest.mark.asyncio
async def test_current_stage(mock_uow):
    mock_uow.stages.get_sub_active.return_value = None
    assert (await GetCurrentStageUseCase(mock_uow).execute()).value.stage is None

    mock_uow.stages.get_sub_active.return_value = make_stage(2, is_sub_active=True)
    mock_uow.stage_entities.count_by_from_stage.return_value = {}
    current = (await GetCurrentStageUseCase(mock_uow).execute()).value.stage
    assert current.stage_number == 2


@pytest.mark.asyncio
async def test_create_entity_rejects_empty_range(mock_uow):
    result = await CreateStageEntityUseCase(mock_uow).execute(
        CreateStageEntityCommand(
            kind=StageEntityKind.task,
            created_by_id=str(uuid4()),
            title="Kneel",
            active_from_stage=2,
            active_to_stage=2,
        )
    )

    assert result.is_err()
    assert result.error.code == "INVALID_STAGE_RANGE"
    mock_uow.stage_entities.create.assert_not_called()


@pytest.mark.asyncio
async def test_create_task_sanitizes_title(mock_uow):
    result = await CreateStageEntityUseCase(mock_uow).execute(
        CreateStageEntityCommand(
            kind=StageEntityKind.task,
            created_by_id=str(uuid4()),
            title="  Make <script>x</script>coffee ",
            points=10,
        )
    )

    assert result.is_ok()
    created = mock_uow.stage_entities.create.call_args[0][0]
    assert isinstance(created, Task)
    assert created.title == "Make coffee"
    assert result.value.points == 10
    assert result.value.active_from_stage == 1


@pytest.mark.asyncio
async def test_get_stage_entities_splits_direct_and_inherited(mock_uow):
    creator = uuid4()
    mock_uow.stages.get_by_number.return_value = make_stage(2)
    rules = [
        Rule(id=uuid4(), title="Old", active_from_stage=1, created_by_id=creator),
        Rule(id=uuid4(), title="New", active_from_stage=2, active_to_stage=4, created_by_id=creator),
    ]
    mock_uow.stage_entities.get_visible_at.side_effect = (
        lambda kind, number: rules if kind == StageEntityKind.rule else []
    )

    result = await GetStageEntitiesUseCase(mock_uow).execute(2)

    assert result.is_ok()
    data = result.value
    assert [r.title for r in data.rules.direct] == ["New"]
    assert [r.title for r in data.rules.inherited] == ["Old"]
    assert data.tasks.direct == [] and data.goals.inherited == []


@pytest.mark.asyncio
async def test_get_stage_entities_unknown_stage(mock_uow):
    mock_uow.stages.get_by_number.return_value = None

    result = await GetStageEntitiesUseCase(mock_uow).execute(9)

    assert result.error.code == "STAGE_NOT_FOUND"
