"""
Role Guards

FastAPI dependencies that restrict routes to users holding given roles.
"""

from fastapi import Depends, status

from underneath.api.error import ClientError
from underneath.depends import get_current_user
from underneath.domain.entities import UserRole
from underneath.result import Error


def require_roles(*roles: UserRole):
    """
    Build a dependency that admits only the listed roles.

    Raises:
        ClientError: 403 if the token's role is not allowed
    """
    allowed = {role.value for role in roles}

    async def dependency(current_user: dict = Depends(get_current_user)) -> dict:
        if current_user.get("role") not in allowed:
            raise ClientError(
                Error(
                    "FORBIDDEN",
                    f"This action requires one of the roles: {', '.join(sorted(allowed))}",
                ),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return current_user

    return dependency
