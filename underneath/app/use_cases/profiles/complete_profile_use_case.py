import logging
from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.profiles import missing_requirements
from underneath.result import Error, Result, Return

from .dtos import CompleteProfileResponse
from .get_profile_use_case import USER_NOT_FOUND

logger = logging.getLogger(__name__)


class CompleteProfileUseCase:
    """
    Mark the caller's profile as completed.

    Fails with PROFILE_INCOMPLETE, listing what is missing, until the stored
    profile meets every requirement. Already completed profiles succeed
    without changes.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[CompleteProfileResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(USER_NOT_FOUND)

            if user.profile_completed:
                return Return.ok(CompleteProfileResponse(is_complete=True, already_completed=True))

            profile = await self.uow.profiles.get_by_user_id(user_id)
            missing = missing_requirements(
                user.role.value,
                profile.preferred_name if profile else None,
                profile.experience_level if profile else None,
                profile.preferences if profile else None,
                profile.completed_steps if profile else None,
            )
            if missing:
                return Return.err(
                    Error("PROFILE_INCOMPLETE", "Profile requirements not met", missing)
                )

            user.profile_completed = True
            await self.uow.users.update(user)
            await self.uow.commit()

            logger.info(f"Profile completed for user {user_id}")

            return Return.ok(CompleteProfileResponse(is_complete=True, already_completed=False))
