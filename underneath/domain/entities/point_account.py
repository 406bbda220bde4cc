"""
PointAccount Entity

Running point total of a user. The current stage is derived, never stored.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow


class PointAccount(SQLModel, table=True):
    __tablename__ = "point_accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", unique=True, index=True)
    total_points: int = Field(default=0, ge=0)
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
