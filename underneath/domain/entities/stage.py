"""
Stage Entity

Numbered progression stages with point thresholds and SUB-facing flags.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class Stage(SQLModel, table=True):
    """
    Stage entity.

    Business Rules:
    - stage_number is unique and defines the ordering
    - points_required is the threshold for automatic advancement
    - At most one stage has is_sub_active = true system-wide
    """

    __tablename__ = "stages"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    stage_number: int = Field(unique=True, index=True, ge=0)
    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    points_required: int = Field(default=0, ge=0)
    color: Optional[str] = Field(default=None, max_length=20)
    is_active: bool = Field(default=True)

    # SUB-facing settings
    is_sub_active: bool = Field(default=False)
    is_sub_visible: bool = Field(default=True)
    is_sub_locked: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_stage_single_sub_active",
            "is_sub_active",
            unique=True,
            sqlite_where=text("is_sub_active = 1"),
            postgresql_where=text("is_sub_active"),
        ),
    )
