from underneath.domain.entities import Profile, User
from underneath.domain.profiles import preference_template

from .dtos import ProfileData, ProfileUser


def profile_user(user: User) -> ProfileUser:
    return ProfileUser(
        id=str(user.id),
        email=user.email,
        role=user.role.value,
        display_name=user.display_name,
        profile_completed=user.profile_completed,
    )


def profile_data(profile: Profile) -> ProfileData:
    return ProfileData(
        id=str(profile.id),
        user_id=str(profile.user_id),
        preferred_name=profile.preferred_name,
        experience_level=profile.experience_level,
        goals=profile.goals,
        availability=profile.availability or {},
        preferences=profile.preferences or {},
        boundaries=profile.boundaries or {},
        communication=profile.communication or {},
        completed_steps=list(profile.completed_steps or []),
        created_at=profile.created_at.isoformat(),
        updated_at=profile.updated_at.isoformat(),
    )


def empty_profile(role: str) -> ProfileData:
    return ProfileData(preferences=preference_template(role))
