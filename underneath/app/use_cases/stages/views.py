from typing import Dict

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.entities import Stage, StageEntityKind, StageScopedEntity

from .dtos import StageEntityResponse, StageResponse


async def entity_counts(uow: UnitOfWork) -> Dict[StageEntityKind, Dict[int, int]]:
    """Per kind, the number of entities keyed by active_from_stage"""
    return {kind: await uow.stage_entities.count_by_from_stage(kind) for kind in StageEntityKind}


def stage_response(
    stage: Stage, counts: Dict[StageEntityKind, Dict[int, int]] = None
) -> StageResponse:
    counts = counts or {}
    return StageResponse(
        id=str(stage.id),
        stage_number=stage.stage_number,
        name=stage.name,
        description=stage.description,
        points_required=stage.points_required,
        color=stage.color,
        is_active=stage.is_active,
        is_sub_active=stage.is_sub_active,
        is_sub_visible=stage.is_sub_visible,
        is_sub_locked=stage.is_sub_locked,
        created_at=stage.created_at.isoformat(),
        updated_at=stage.updated_at.isoformat(),
        task_count=counts.get(StageEntityKind.task, {}).get(stage.stage_number, 0),
        rule_count=counts.get(StageEntityKind.rule, {}).get(stage.stage_number, 0),
        goal_count=counts.get(StageEntityKind.goal, {}).get(stage.stage_number, 0),
    )


def entity_response(kind: StageEntityKind, entity: StageScopedEntity) -> StageEntityResponse:
    due_date = getattr(entity, "due_date", None)
    target_date = getattr(entity, "target_date", None)
    return StageEntityResponse(
        id=str(entity.id),
        kind=kind,
        title=entity.title,
        description=entity.description,
        active_from_stage=entity.active_from_stage,
        active_to_stage=entity.active_to_stage,
        created_by_id=str(entity.created_by_id),
        created_at=entity.created_at.isoformat(),
        priority=getattr(entity, "priority", None),
        severity=getattr(entity, "severity", None),
        points=getattr(entity, "points", None),
        due_date=due_date.isoformat() if due_date else None,
        target_date=target_date.isoformat() if target_date else None,
    )
