from underneath.domain.entities import UserRole
from underneath.domain.profiles import ROLE_STEPS, preference_template, required_steps
from underneath.result import Error, Result, Return

from .dtos import ProfileTemplateResponse


class GetProfileTemplateUseCase:
    """
    Steps and starting preferences for a role.

    ADMIN may read any template; everyone else only their own role's.
    """

    def execute(self, role: str, caller_role: str) -> Result[ProfileTemplateResponse]:
        role = role.upper()
        if role not in ROLE_STEPS:
            return Return.err(Error("INVALID_ROLE", f"No profile template for role {role}"))

        if caller_role not in (UserRole.ADMIN.value, role):
            return Return.err(
                Error("FORBIDDEN", "Only admins may read other roles' templates")
            )

        return Return.ok(
            ProfileTemplateResponse(
                role=role,
                steps=required_steps(role),
                preferences=preference_template(role),
                description=f"Profile completion template for {role} role",
            )
        )
