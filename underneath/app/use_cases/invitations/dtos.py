"""
Invitation Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the invitation domain.
"""

from typing import List, Optional
from pydantic import BaseModel

from underneath.app.use_cases.connections.dtos import ConnectionInfo


class CreateInvitationCommand(BaseModel):
    """Invitation request of a DOM"""

    dom_id: str
    email: Optional[str] = None
    message: Optional[str] = None
    valid_hours: Optional[int] = None


class CreateInvitationResponse(BaseModel):
    """Response for create invitation use case"""

    id: str
    code: str
    email: Optional[str] = None
    message: Optional[str] = None
    expires_at: str
    is_active: bool
    created_at: str
    email_sent: bool


class InvitationSummary(BaseModel):
    """Public details of a redeemable invitation"""

    code: str
    dom_id: str
    dom_display_name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
    expires_at: str


class ValidateInvitationResponse(BaseModel):
    """
    Response for validate invitation use case.

    Failures are returned as errors, so is_valid is always true here; it stays
    in the payload for clients that branch on it.
    """

    is_valid: bool = True
    invitation: InvitationSummary


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    success: bool
    connection: ConnectionInfo


class InvitationItem(BaseModel):
    """An invitation as listed to its DOM"""

    id: str
    code: str
    email: Optional[str] = None
    message: Optional[str] = None
    is_active: bool
    is_expired: bool
    expires_at: str
    created_at: str
    accepted_at: Optional[str] = None


class ListInvitationsResponse(BaseModel):
    invitations: List[InvitationItem]
