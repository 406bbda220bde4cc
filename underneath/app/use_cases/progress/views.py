from typing import List
from uuid import UUID

from underneath.domain.entities import Stage
from underneath.domain.progression import progress_to_next

from .dtos import ProgressResponse


def progress_response(user_id: UUID, total_points: int, stages: List[Stage]) -> ProgressResponse:
    """Progress over the active stages only"""
    active = [s for s in stages if s.is_active]
    progress = progress_to_next(total_points, active)
    names = {s.stage_number: s.name for s in active}

    return ProgressResponse(
        user_id=str(user_id),
        total_points=progress.total_points,
        current_stage=progress.current_stage,
        current_stage_name=names.get(progress.current_stage),
        next_stage=progress.next_stage,
        points_to_next_stage=progress.points_to_next_stage,
        progress_percentage=progress.progress_percentage,
    )
