"""
Stage Use Cases

Stage management, SUB-facing toggles and stage-scoped entities.
"""

from .dtos import (
    CreateStageCommand,
    CreateStageEntityCommand,
    CurrentStageResponse,
    DeleteStageResponse,
    EntityGroup,
    StageEntitiesResponse,
    StageEntityResponse,
    StageListResponse,
    StageResponse,
    UpdateStageCommand,
)
from .get_all_stages_use_case import GetAllStagesUseCase
from .get_stage_use_case import (
    GetCurrentStageUseCase,
    GetStageByNumberUseCase,
    GetStageUseCase,
)
from .manage_stage_use_cases import (
    CreateStageUseCase,
    DeleteStageUseCase,
    InitializeDefaultStagesUseCase,
    UpdateStageUseCase,
)
from .stage_entity_use_cases import CreateStageEntityUseCase, GetStageEntitiesUseCase
from .toggle_stage_use_cases import (
    ToggleSubActiveUseCase,
    ToggleSubLockedUseCase,
    ToggleSubVisibleUseCase,
)

__all__ = [
    # Use Cases
    "GetAllStagesUseCase",
    "GetStageUseCase",
    "GetStageByNumberUseCase",
    "GetCurrentStageUseCase",
    "CreateStageUseCase",
    "UpdateStageUseCase",
    "DeleteStageUseCase",
    "InitializeDefaultStagesUseCase",
    "ToggleSubActiveUseCase",
    "ToggleSubVisibleUseCase",
    "ToggleSubLockedUseCase",
    "CreateStageEntityUseCase",
    "GetStageEntitiesUseCase",
    # DTOs
    "CreateStageCommand",
    "UpdateStageCommand",
    "StageResponse",
    "StageListResponse",
    "CurrentStageResponse",
    "DeleteStageResponse",
    "CreateStageEntityCommand",
    "StageEntityResponse",
    "EntityGroup",
    "StageEntitiesResponse",
]
