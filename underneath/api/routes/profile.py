from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from underneath.api.error import ClientError, ServerError
from underneath.api.utils.rate_limit import profile_limiter
from underneath.app.services.unit_of_work import UnitOfWork
from underneath.app.use_cases.profiles import (
    CompleteProfileResponse,
    CompleteProfileUseCase,
    GetProfileProgressUseCase,
    GetProfileTemplateUseCase,
    GetProfileUseCase,
    ProfileProgressResponse,
    ProfileResponse,
    ProfileTemplateResponse,
    UpdateProfileCommand,
    UpdateProfileResponse,
    UpdateProfileUseCase,
)
from underneath.depends import current_user_id, get_current_user, get_unit_of_work
from underneath.domain.entities import ExperienceLevel

router = APIRouter(
    prefix="/profile", tags=["Profile"], dependencies=[Depends(profile_limiter)]
)


def _raise_for(error):
    if error.code == "USER_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    elif error.code in ("VALIDATION_FAILED", "PROFILE_INCOMPLETE"):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


@router.get("", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def get_profile(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """The caller's profile, or the empty template of their role"""
    result = await GetProfileUseCase(uow).execute(current_user_id(current_user))

    if result.is_err():
        _raise_for(result.error)

    return result.value


class Availability(BaseModel):
    days: Optional[List[str]] = None
    time_slots: Optional[List[str]] = None
    timezone: Optional[str] = None


class Boundaries(BaseModel):
    hard_limits: Optional[List[str]] = None
    soft_limits: Optional[List[str]] = None
    preferences: Optional[List[str]] = None


class Communication(BaseModel):
    frequency: Optional[str] = None
    style: Optional[str] = None
    contact_methods: Optional[List[str]] = None
    emergency_contact: Optional[bool] = None


class UpdateProfileRequest(BaseModel):
    """
    Update profile HTTP request payload

    Every field is optional. step_completed records one onboarding step.
    """

    preferred_name: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    goals: Optional[str] = None
    availability: Optional[Availability] = None
    preferences: Optional[dict] = None
    boundaries: Optional[Boundaries] = None
    communication: Optional[Communication] = None
    step_completed: Optional[str] = Field(None, max_length=50)


@router.put("", status_code=status.HTTP_200_OK, response_model=UpdateProfileResponse)
async def update_profile(
    request: UpdateProfileRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Profile

    Applies only the fields present in the body.

    Raises:
        - 400 Bad Request: VALIDATION_FAILED
        - 404 Not Found: USER_NOT_FOUND
        - 429 Too Many Requests: RATE_LIMITED
    """
    command = UpdateProfileCommand(
        user_id=current_user["user_id"],
        **request.model_dump(exclude_unset=True),
    )

    result = await UpdateProfileUseCase(uow).execute(command)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.get("/progress", status_code=status.HTTP_200_OK, response_model=ProfileProgressResponse)
async def get_profile_progress(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Completed and remaining onboarding steps"""
    result = await GetProfileProgressUseCase(uow).execute(current_user_id(current_user))

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.post("/complete", status_code=status.HTTP_200_OK, response_model=CompleteProfileResponse)
async def complete_profile(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Complete Profile

    Raises:
        - 400 Bad Request: PROFILE_INCOMPLETE, details list what is missing
        - 404 Not Found: USER_NOT_FOUND
    """
    result = await CompleteProfileUseCase(uow).execute(current_user_id(current_user))

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.get(
    "/template/{role}", status_code=status.HTTP_200_OK, response_model=ProfileTemplateResponse
)
async def get_profile_template(role: str, current_user: dict = Depends(get_current_user)):
    """
    Profile Template

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 403 Forbidden: Another role's template requested by a non-admin
    """
    result = GetProfileTemplateUseCase().execute(role, current_user.get("role"))

    if result.is_err():
        error = result.error
        if error.code == "INVALID_ROLE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value
