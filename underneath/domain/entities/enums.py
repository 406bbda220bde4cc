"""
Underneath Domain Enums

All enumeration types used across domain entities.
Member names equal their values; SQLAlchemy persists enum names.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role a user plays on the platform"""

    DOM = "DOM"
    SUB = "SUB"
    OBSERVER = "OBSERVER"
    ADMIN = "ADMIN"


class UserStatus(str, Enum):
    """User account status"""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    PENDING = "PENDING"


class ConnectionStatus(str, Enum):
    """DOM/SUB connection status"""

    ACTIVE = "ACTIVE"
    TERMINATED = "TERMINATED"
    SUSPENDED = "SUSPENDED"


class Priority(str, Enum):
    """Task priority and rule severity scale"""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class StageEntityKind(str, Enum):
    """Kinds of entities scoped to a stage range"""

    task = "task"
    rule = "rule"
    goal = "goal"


class ExperienceLevel(str, Enum):
    """Self-reported experience on a profile"""

    BEGINNER = "BEGINNER"
    EXPERIENCED = "EXPERIENCED"
    EXPERT = "EXPERT"
