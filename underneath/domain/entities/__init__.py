"""
Underneath Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    UserRole,
    UserStatus,
    ConnectionStatus,
    Priority,
    StageEntityKind,
    ExperienceLevel,
)

# Export all entities
from .user import User
from .session import Session
from .invitation import Invitation
from .connection import Connection
from .stage import Stage
from .stage_entities import StageScopedEntity, Task, Rule, Goal
from .point_account import PointAccount
from .profile import Profile

__all__ = [
    # Enums
    "UserRole",
    "UserStatus",
    "ConnectionStatus",
    "Priority",
    "StageEntityKind",
    "ExperienceLevel",
    # Entities
    "User",
    "Session",
    "Invitation",
    "Connection",
    "Stage",
    "StageScopedEntity",
    "Task",
    "Rule",
    "Goal",
    "PointAccount",
    "Profile",
]
