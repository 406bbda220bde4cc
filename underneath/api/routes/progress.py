from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from underneath.api.error import ClientError, ServerError
from underneath.api.utils.roles import require_roles
from underneath.app.services.unit_of_work import UnitOfWork
from underneath.app.use_cases.progress import (
    AwardPointsCommand,
    AwardPointsResponse,
    AwardPointsUseCase,
    GetProgressUseCase,
    ProgressResponse,
)
from underneath.depends import current_user_id, get_current_user, get_unit_of_work
from underneath.domain.entities import UserRole

router = APIRouter(prefix="/progress", tags=["Progress"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=ProgressResponse)
async def get_my_progress(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Points, current stage and distance to the next stage"""
    use_case = GetProgressUseCase(uow)
    result = await use_case.execute(current_user_id(current_user))

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class AwardPointsRequest(BaseModel):
    points: int = Field(..., ge=-10000, le=10000, description="Negative to deduct")
    reason: Optional[str] = Field(None, max_length=500)


@router.post("/award", status_code=status.HTTP_200_OK, response_model=AwardPointsResponse)
async def award_points(
    request: AwardPointsRequest,
    current_user: dict = Depends(require_roles(UserRole.DOM)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Award Points

    The calling DOM awards or deducts points for its connected SUB.

    Raises:
        - 400 Bad Request: VALIDATION_FAILED (zero points)
        - 403 Forbidden: Caller is not a DOM
        - 404 Not Found: NO_ACTIVE_CONNECTION
    """
    command = AwardPointsCommand(
        dom_id=current_user["user_id"], points=request.points, reason=request.reason
    )

    use_case = AwardPointsUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_FAILED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "NOT_A_DOM":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "NO_ACTIVE_CONNECTION":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
