"""
Progress Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional
from pydantic import BaseModel, Field


class ProgressResponse(BaseModel):
    """A user's points and where they sit in the stage ladder"""

    user_id: str
    total_points: int
    current_stage: Optional[int] = None
    current_stage_name: Optional[str] = None
    next_stage: Optional[int] = None
    points_to_next_stage: int
    progress_percentage: float


class AwardPointsCommand(BaseModel):
    dom_id: str
    points: int = Field(ge=-10000, le=10000)
    reason: Optional[str] = Field(default=None, max_length=500)


class AwardPointsResponse(BaseModel):
    success: bool
    awarded: int
    reason: Optional[str] = None
    progress: ProgressResponse
