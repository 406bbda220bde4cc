"""
Profile Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from underneath.domain.entities import ExperienceLevel


class ProfileUser(BaseModel):
    id: str
    email: str
    role: str
    display_name: Optional[str] = None
    profile_completed: bool


class ProfileData(BaseModel):
    """A stored profile, or the empty template of a user who has none yet"""

    id: Optional[str] = None
    user_id: Optional[str] = None
    preferred_name: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    goals: Optional[str] = None
    availability: dict = Field(default_factory=dict)
    preferences: dict = Field(default_factory=dict)
    boundaries: dict = Field(default_factory=dict)
    communication: dict = Field(default_factory=dict)
    completed_steps: List[str] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ProfileResponse(BaseModel):
    user: ProfileUser
    profile: ProfileData
    is_new_profile: bool


class UpdateProfileCommand(BaseModel):
    """
    Partial profile update.

    Only fields the caller actually sent are applied; JSON sections replace
    the stored section as a whole.
    """

    user_id: str
    preferred_name: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    goals: Optional[str] = None
    availability: Optional[dict] = None
    preferences: Optional[dict] = None
    boundaries: Optional[dict] = None
    communication: Optional[dict] = None
    step_completed: Optional[str] = None


class UpdateProfileResponse(BaseModel):
    profile: ProfileData
    is_complete: bool
    next_steps: List[str]


class ProfileProgressResponse(BaseModel):
    progress: int
    completed: List[str]
    remaining: List[str]
    is_complete: bool


class CompleteProfileResponse(BaseModel):
    is_complete: bool
    already_completed: bool


class ProfileTemplateResponse(BaseModel):
    role: str
    steps: List[str]
    preferences: dict
    description: str
