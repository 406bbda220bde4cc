"""
Profile Use Cases

Onboarding profile lookup, partial updates and completion tracking.
"""

from .complete_profile_use_case import CompleteProfileUseCase
from .dtos import (
    CompleteProfileResponse,
    ProfileProgressResponse,
    ProfileResponse,
    ProfileTemplateResponse,
    UpdateProfileCommand,
    UpdateProfileResponse,
)
from .get_profile_template_use_case import GetProfileTemplateUseCase
from .get_profile_use_case import GetProfileProgressUseCase, GetProfileUseCase
from .update_profile_use_case import UpdateProfileUseCase

__all__ = [
    "GetProfileUseCase",
    "GetProfileProgressUseCase",
    "UpdateProfileUseCase",
    "CompleteProfileUseCase",
    "GetProfileTemplateUseCase",
    "UpdateProfileCommand",
    "ProfileResponse",
    "UpdateProfileResponse",
    "ProfileProgressResponse",
    "CompleteProfileResponse",
    "ProfileTemplateResponse",
]
