from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.profiles import completion_percentage, remaining_steps, required_steps
from underneath.result import Error, Result, Return

from .dtos import ProfileProgressResponse, ProfileResponse
from .views import empty_profile, profile_data, profile_user

USER_NOT_FOUND = Error("USER_NOT_FOUND", "User not found")


class GetProfileUseCase:
    """
    Current user's profile.

    Users who never saved a profile get the empty template of their role,
    flagged with is_new_profile.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[ProfileResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)

            profile = await self.uow.profiles.get_by_user_id(user_id)
            if profile is None:
                return Return.ok(
                    ProfileResponse(
                        user=profile_user(user),
                        profile=empty_profile(user.role.value),
                        is_new_profile=True,
                    )
                )

            return Return.ok(
                ProfileResponse(
                    user=profile_user(user), profile=profile_data(profile), is_new_profile=False
                )
            )


class GetProfileProgressUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[ProfileProgressResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)

            profile = await self.uow.profiles.get_by_user_id(user_id)
            done = profile.completed_steps if profile else []
            role = user.role.value
            remaining = remaining_steps(role, done)

            return Return.ok(
                ProfileProgressResponse(
                    progress=completion_percentage(role, done),
                    completed=[s for s in required_steps(role) if s not in remaining],
                    remaining=remaining,
                    is_complete=user.profile_completed,
                )
            )
