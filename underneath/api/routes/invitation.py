from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from underneath.api.error import ClientError, ServerError
from underneath.api.utils.rate_limit import create_invitation_limiter, validate_code_limiter
from underneath.api.utils.roles import require_roles
from underneath.app.services.email_sender import EmailSender
from underneath.app.services.unit_of_work import UnitOfWork
from underneath.app.use_cases.invitations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CreateInvitationCommand,
    CreateInvitationResponse,
    CreateInvitationUseCase,
    ListInvitationsResponse,
    ListInvitationsUseCase,
    ValidateInvitationResponse,
    ValidateInvitationUseCase,
)
from underneath.depends import current_user_id, get_email_sender, get_unit_of_work
from underneath.domain.entities import UserRole

router = APIRouter(prefix="/invitations", tags=["Invitations"])

class CreateInvitationRequest(BaseModel):
    """
    Create invitation HTTP request payload

    Email and message are optional; a code can be shared by hand.
    """

    email: Optional[str] = Field(None, max_length=255, description="Recipient email")
    message: Optional[str] = Field(None, description="Personal message, max 500 chars")
    valid_hours: Optional[int] = Field(None, ge=1, le=24 * 30, description="Validity window")

@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateInvitationResponse,
    dependencies=[Depends(create_invitation_limiter)],
)
async def create_invitation(
    request: CreateInvitationRequest,
    current_user: dict = Depends(require_roles(UserRole.DOM)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """
    Create Invitation

    Issues a single-use code and mails it when an email is given.
    A failed mail leaves the invitation in place with email_sent = false.

    Raises:
        - 400 Bad Request: VALIDATION_FAILED
        - 403 Forbidden: Caller is not a DOM
        - 409 Conflict: DOM already connected, or active invitation for the email
        - 429 Too Many Requests: RATE_LIMITED
        - 500 Internal Server Error: Code generation failed
    """
    command = CreateInvitationCommand(
        dom_id=current_user["user_id"],
        email=request.email,
        message=request.message,
        valid_hours=request.valid_hours,
    )

    use_case = CreateInvitationUseCase(uow, email_sender)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_FAILED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "NOT_A_DOM":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code in ("DOM_ALREADY_CONNECTED", "INVITATION_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value

@router.get("", status_code=status.HTTP_200_OK, response_model=ListInvitationsResponse)
async def list_invitations(
    current_user: dict = Depends(require_roles(UserRole.DOM)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Active invitations of the calling DOM and those accepted in the last 30 days"""
    use_case = ListInvitationsUseCase(uow)
    result = await use_case.execute(current_user_id(current_user))

    if result.is_err():
        raise ServerError(result.error)

    return result.value

class InvitationCodeRequest(BaseModel):
    code: str = Field(..., max_length=64, description="8-character invitation code")

@router.post(
    "/validate",
    status_code=status.HTTP_200_OK,
    response_model=ValidateInvitationResponse,
    dependencies=[Depends(validate_code_limiter)],
)
async def validate_invitation(
    request: InvitationCodeRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Validate Invitation

    Public. Checks a code without consuming it.

    Raises:
        - 400 Bad Request: INVALID_CODE
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_USED
        - 410 Gone: INVITATION_EXPIRED
        - 429 Too Many Requests: RATE_LIMITED
    """
    use_case = ValidateInvitationUseCase(uow)
    result = await use_case.execute(request.code)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CODE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "INVITATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "INVITATION_ALREADY_USED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVITATION_EXPIRED":
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    return result.value

@router.post(
    "/accept",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInvitationResponse,
)
async def accept_invitation(
    request: InvitationCodeRequest,
    current_user: dict = Depends(require_roles(UserRole.SUB)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Accept Invitation

    The calling SUB redeems a code and becomes connected to its DOM.

    Raises:
        - 400 Bad Request: INVALID_CODE, INVALID_SUB, INVALID_DOM
        - 409 Conflict: INVITATION_ALREADY_USED, DOM_ALREADY_CONNECTED,
                        SUB_ALREADY_CONNECTED
        - 410 Gone: INVITATION_EXPIRED
        - 500 Internal Server Error: Server error
    """
    use_case = AcceptInvitationUseCase(uow)
    result = await use_case.execute(
        request.code, current_user_id(current_user)
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_CODE", "INVALID_SUB", "INVALID_DOM"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in (
            "INVITATION_ALREADY_USED",
            "DOM_ALREADY_CONNECTED",
            "SUB_ALREADY_CONNECTED",
        ):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVITATION_EXPIRED":
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    return result.value
