"""
Progress Use Cases

Point totals and derived stage advancement.
"""

from .award_points_use_case import AwardPointsUseCase
from .dtos import AwardPointsCommand, AwardPointsResponse, ProgressResponse
from .get_progress_use_case import GetProgressUseCase

__all__ = [
    "GetProgressUseCase",
    "AwardPointsUseCase",
    "AwardPointsCommand",
    "AwardPointsResponse",
    "ProgressResponse",
]
