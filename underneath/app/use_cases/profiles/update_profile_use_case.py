"""
Update Profile Use Case

Partial profile update that records onboarding steps and flips the user's
profile_completed flag once every requirement is met.
"""

import logging
from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.base import utcnow
from underneath.domain.entities import Profile
from underneath.domain.profiles import missing_requirements, remaining_steps, required_steps
from underneath.result import Error, Result, Return

from .dtos import UpdateProfileCommand, UpdateProfileResponse
from .get_profile_use_case import USER_NOT_FOUND
from .views import profile_data

logger = logging.getLogger(__name__)

MAX_PREFERRED_NAME = 100
MAX_GOALS = 2000


class UpdateProfileUseCase:
    """
    Business Rules:
    - Only sent fields change; the profile is created on first update
    - step_completed must be one of the role's required steps
    - Completion is one-way: profile_completed is never cleared
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: UpdateProfileCommand) -> Result[UpdateProfileResponse]:
        user_id = UUID(command.user_id)
        changes = command.model_dump(exclude_unset=True, exclude={"user_id", "step_completed"})

        if "preferred_name" in changes:
            changes["preferred_name"] = (changes["preferred_name"] or "").strip() or None

        violations = []
        if len(changes.get("preferred_name") or "") > MAX_PREFERRED_NAME:
            violations.append(
                f"Preferred name must not exceed {MAX_PREFERRED_NAME} characters"
            )
        if len(changes.get("goals") or "") > MAX_GOALS:
            violations.append(f"Goals must not exceed {MAX_GOALS} characters")

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)

            role = user.role.value
            step = command.step_completed
            if step is not None and step not in required_steps(role):
                violations.append(f"Unknown profile step '{step}' for role {role}")

            if violations:
                return Return.err(
                    Error("VALIDATION_FAILED", "Profile data is invalid", violations)
                )

            profile = await self.uow.profiles.get_by_user_id(user_id)
            is_new = profile is None
            if is_new:
                profile = Profile(user_id=user_id)

            for field, value in changes.items():
                setattr(profile, field, value)

            steps = list(profile.completed_steps or [])
            if step is not None and step not in steps:
                steps.append(step)
            profile.completed_steps = steps
            profile.updated_at = utcnow()

            if is_new:
                profile = await self.uow.profiles.create(profile)
            else:
                profile = await self.uow.profiles.update(profile)

            missing = missing_requirements(
                role,
                profile.preferred_name,
                profile.experience_level,
                profile.preferences,
                profile.completed_steps,
            )
            is_complete = not missing
            if is_complete and not user.profile_completed:
                user.profile_completed = True
                await self.uow.users.update(user)

            response = UpdateProfileResponse(
                profile=profile_data(profile),
                is_complete=is_complete,
                next_steps=remaining_steps(role, profile.completed_steps),
            )

            await self.uow.commit()

            logger.info(
                f"Profile updated for user {user_id} "
                f"(step={step}, complete={is_complete})"
            )

            return Return.ok(response)
