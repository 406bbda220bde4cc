"""
Stage-scoped Entities

Tasks, rules and goals attach to a stage-number range:
active_from_stage is inclusive, active_to_stage is exclusive (None = unbounded).
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import DateTime, Field, SQLModel

from ..base import utcnow
from ..progression import is_inherited
from .enums import Priority


class StageScopedEntity(SQLModel):
    """Fields shared by every stage-scoped table"""

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)

    active_from_stage: int = Field(default=1, ge=0, index=True)
    active_to_stage: Optional[int] = Field(default=None)

    created_by_id: UUID = Field(foreign_key="users.id", nullable=False)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)

    def is_inherited_at(self, stage_number: int) -> bool:
        return is_inherited(self.active_from_stage, self.active_to_stage, stage_number)


class Task(StageScopedEntity, table=True):
    __tablename__ = "tasks"

    priority: Priority = Field(default=Priority.MEDIUM)
    points: int = Field(default=0)
    due_date: Optional[date] = None


class Rule(StageScopedEntity, table=True):
    __tablename__ = "rules"

    severity: Priority = Field(default=Priority.MEDIUM)


class Goal(StageScopedEntity, table=True):
    __tablename__ = "goals"

    points: int = Field(default=0)
    target_date: Optional[date] = None
