"""
Profile Completion Rules

Role-specific onboarding steps and the preference keys each role starts with.
"""

from typing import Dict, List, Optional, Sequence

BASE_STEPS = ["basic_info", "preferences", "communication"]

ROLE_STEPS: Dict[str, List[str]] = {
    "DOM": BASE_STEPS + ["leadership_style"],
    "SUB": BASE_STEPS + ["goals_boundaries"],
    "OBSERVER": BASE_STEPS + ["professional_info"],
}

PREFERENCE_TEMPLATES: Dict[str, dict] = {
    "DOM": {"leadership_style": None, "focus": [], "reward_types": [], "monitoring_level": None},
    "SUB": {"motivation": [], "learning_style": None, "task_types": []},
    "OBSERVER": {
        "relationship": None,
        "background": None,
        "role": None,
        "reporting_frequency": None,
    },
}


def required_steps(role: str) -> List[str]:
    """Steps a user of the role must complete; unknown roles get the base steps"""
    return list(ROLE_STEPS.get(role, BASE_STEPS))


def preference_template(role: str) -> dict:
    return {
        key: list(value) if isinstance(value, list) else value
        for key, value in PREFERENCE_TEMPLATES.get(role, {}).items()
    }


def remaining_steps(role: str, completed_steps: Optional[Sequence[str]]) -> List[str]:
    done = set(completed_steps or [])
    return [step for step in required_steps(role) if step not in done]


def missing_requirements(
    role: str,
    preferred_name: Optional[str],
    experience_level: Optional[str],
    preferences: Optional[dict],
    completed_steps: Optional[Sequence[str]],
) -> List[str]:
    """
    Everything still blocking completion, in a stable order. The preferences
    field and the preferences step share one entry.

    A profile is complete once it has a preferred name, an experience level,
    at least one preference key, and every required step.
    """
    missing = []
    if not preferred_name:
        missing.append("preferred_name")
    if not experience_level:
        missing.append("experience_level")
    if not preferences:
        missing.append("preferences")
    for step in remaining_steps(role, completed_steps):
        if step not in missing:
            missing.append(step)
    return missing


def completion_percentage(role: str, completed_steps: Optional[Sequence[str]]) -> int:
    steps = required_steps(role)
    done = len(steps) - len(remaining_steps(role, completed_steps))
    return round(done / len(steps) * 100)
