"""
Profile Entity

Onboarding details a user fills in after registration.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from ..base import utcnow
from .enums import ExperienceLevel


class Profile(SQLModel, table=True):
    """
    Profile entity.

    Business Rules:
    - At most one profile per user, created on first update
    - completed_steps only holds steps required for the owner's role
    - JSON sections are replaced as a whole, never merged
    """

    __tablename__ = "profiles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", unique=True, index=True)

    preferred_name: Optional[str] = Field(default=None, max_length=100)
    experience_level: Optional[ExperienceLevel] = Field(default=None)
    goals: Optional[str] = Field(default=None, max_length=2000)

    availability: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    preferences: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    boundaries: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    communication: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    completed_steps: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
