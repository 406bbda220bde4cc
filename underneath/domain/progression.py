"""
Stage Progression Rules

Pure functions for stage visibility and point-based advancement.
No I/O; callers pass the stages they loaded.
"""

from typing import Optional, Protocol, Sequence

from pydantic import BaseModel


class Threshold(Protocol):
    stage_number: int
    points_required: int


class StageProgress(BaseModel):
    """Where a point total sits in the ordered stage list"""

    total_points: int
    current_stage: Optional[int]
    next_stage: Optional[int]
    points_to_next_stage: int
    progress_percentage: float


def is_visible_at_stage(
    active_from_stage: int, active_to_stage: Optional[int], stage_number: int
) -> bool:
    """
    An entity is visible at a stage when the stage lies in
    [active_from_stage, active_to_stage). A missing upper bound means the
    entity carries forward through every later stage.
    """
    if stage_number < active_from_stage:
        return False
    return active_to_stage is None or stage_number < active_to_stage


def is_inherited(
    active_from_stage: int, active_to_stage: Optional[int], stage_number: int
) -> bool:
    """Visible at the stage but introduced at an earlier one."""
    return (
        is_visible_at_stage(active_from_stage, active_to_stage, stage_number)
        and active_from_stage < stage_number
    )


def resolve_stage(total_points: int, stages: Sequence[Threshold]) -> Optional[int]:
    """
    Highest stage_number whose points_required <= total_points.

    Several stages may share a threshold; the highest number wins.
    Returns None when no stage is reachable.
    """
    reached = [s.stage_number for s in stages if s.points_required <= total_points]
    return max(reached) if reached else None


def progress_to_next(total_points: int, stages: Sequence[Threshold]) -> StageProgress:
    ordered = sorted(stages, key=lambda s: s.stage_number)
    current = resolve_stage(total_points, ordered)

    current_threshold = 0
    if current is not None:
        current_threshold = next(
            s.points_required for s in ordered if s.stage_number == current
        )

    upcoming = [
        s
        for s in ordered
        if (current is None or s.stage_number > current)
        and s.points_required > total_points
    ]
    if not upcoming:
        return StageProgress(
            total_points=total_points,
            current_stage=current,
            next_stage=None,
            points_to_next_stage=0,
            progress_percentage=100.0,
        )

    target = upcoming[0]
    span = target.points_required - current_threshold
    earned = total_points - current_threshold
    percentage = 0.0 if span <= 0 else max(0.0, min(100.0, earned * 100.0 / span))

    return StageProgress(
        total_points=total_points,
        current_stage=current,
        next_stage=target.stage_number,
        points_to_next_stage=target.points_required - total_points,
        progress_percentage=round(percentage, 2),
    )
