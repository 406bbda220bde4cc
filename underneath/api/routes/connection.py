from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from underneath.api.error import ClientError, ServerError
from underneath.api.utils.roles import require_roles
from underneath.app.services.unit_of_work import UnitOfWork
from underneath.app.use_cases.connections import (
    AdminTerminateConnectionUseCase,
    AvailabilityResponse,
    CheckAvailabilityUseCase,
    GetMyConnectionUseCase,
    ListConnectionsResponse,
    ListConnectionsUseCase,
    MyConnectionResponse,
    TerminateConnectionResponse,
    TerminateConnectionUseCase,
)
from underneath.depends import current_user_id, get_current_user, get_unit_of_work
from underneath.domain.entities import UserRole

router = APIRouter(prefix="/connections", tags=["Connections"])


@router.get("/my-connection", status_code=status.HTTP_200_OK, response_model=MyConnectionResponse)
async def get_my_connection(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """The caller's ACTIVE connection with a summary of the partner"""
    use_case = GetMyConnectionUseCase(uow)
    result = await use_case.execute(current_user_id(current_user))

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.post("/terminate", status_code=status.HTTP_200_OK, response_model=TerminateConnectionResponse)
async def terminate_connection(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Terminate Connection

    Ends the caller's ACTIVE connection. Termination is final.

    Raises:
        - 404 Not Found: NO_ACTIVE_CONNECTION
        - 500 Internal Server Error: Server error
    """
    use_case = TerminateConnectionUseCase(uow)
    result = await use_case.execute(current_user_id(current_user))

    if result.is_err():
        error = result.error
        if error.code == "NO_ACTIVE_CONNECTION":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get("/availability", status_code=status.HTTP_200_OK, response_model=AvailabilityResponse)
async def check_availability(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = CheckAvailabilityUseCase(uow)
    result = await use_case.execute(current_user_id(current_user))

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/admin/all", status_code=status.HTTP_200_OK, response_model=ListConnectionsResponse)
async def list_connections(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    current_user: dict = Depends(require_roles(UserRole.ADMIN)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """All connections, newest first. ADMIN only."""
    use_case = ListConnectionsUseCase(uow)
    result = await use_case.execute(limit, offset)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_FAILED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.post(
    "/admin/{connection_id}/terminate",
    status_code=status.HTTP_200_OK,
    response_model=TerminateConnectionResponse,
)
async def admin_terminate_connection(
    connection_id: UUID,
    current_user: dict = Depends(require_roles(UserRole.ADMIN)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Admin Terminate Connection

    Raises:
        - 403 Forbidden: Caller is not an ADMIN
        - 404 Not Found: CONNECTION_NOT_FOUND
        - 409 Conflict: CONNECTION_NOT_ACTIVE
    """
    use_case = AdminTerminateConnectionUseCase(uow)
    result = await use_case.execute(connection_id, current_user_id(current_user))

    if result.is_err():
        error = result.error
        if error.code == "CONNECTION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "CONNECTION_NOT_ACTIVE":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
