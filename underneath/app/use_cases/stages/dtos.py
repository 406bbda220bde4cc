"""
Stage Use Case DTOs (Data Transfer Objects)

Commands and responses for stages and their tasks, rules and goals.
"""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field

from underneath.domain.entities import Priority, StageEntityKind


class CreateStageCommand(BaseModel):
    stage_number: int = Field(ge=0)
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    points_required: int = Field(default=0, ge=0)
    color: Optional[str] = Field(default=None, max_length=20)
    is_active: bool = True


class UpdateStageCommand(BaseModel):
    """Partial update; None leaves a field unchanged"""

    stage_number: Optional[int] = Field(default=None, ge=0)
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    points_required: Optional[int] = Field(default=None, ge=0)
    color: Optional[str] = Field(default=None, max_length=20)
    is_active: Optional[bool] = None


class StageResponse(BaseModel):
    """A stage with the number of entities introduced at it"""

    id: str
    stage_number: int
    name: str
    description: Optional[str] = None
    points_required: int
    color: Optional[str] = None
    is_active: bool
    is_sub_active: bool
    is_sub_visible: bool
    is_sub_locked: bool
    created_at: str
    updated_at: str
    task_count: int = 0
    rule_count: int = 0
    goal_count: int = 0


class StageListResponse(BaseModel):
    stages: List[StageResponse]


class CurrentStageResponse(BaseModel):
    stage: Optional[StageResponse] = None


class DeleteStageResponse(BaseModel):
    success: bool
    stage_id: str


class CreateStageEntityCommand(BaseModel):
    """A task, rule or goal; fields not used by the kind are ignored"""

    kind: StageEntityKind
    created_by_id: str
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    active_from_stage: int = Field(default=1, ge=0)
    active_to_stage: Optional[int] = Field(default=None, ge=0)
    priority: Optional[Priority] = None
    severity: Optional[Priority] = None
    points: Optional[int] = None
    due_date: Optional[date] = None
    target_date: Optional[date] = None


class StageEntityResponse(BaseModel):
    id: str
    kind: StageEntityKind
    title: str
    description: Optional[str] = None
    active_from_stage: int
    active_to_stage: Optional[int] = None
    created_by_id: str
    created_at: str
    priority: Optional[Priority] = None
    severity: Optional[Priority] = None
    points: Optional[int] = None
    due_date: Optional[str] = None
    target_date: Optional[str] = None


class EntityGroup(BaseModel):
    """Entities introduced at a stage and those carried in from earlier ones"""

    direct: List[StageEntityResponse]
    inherited: List[StageEntityResponse]


class StageEntitiesResponse(BaseModel):
    stage_number: int
    tasks: EntityGroup
    rules: EntityGroup
    goals: EntityGroup
