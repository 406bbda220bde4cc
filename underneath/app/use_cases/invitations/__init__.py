"""
Invitation Use Cases

Code issuing, validation and redemption.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .create_invitation_use_case import CreateInvitationUseCase
from .dtos import (
    AcceptInvitationResponse,
    CreateInvitationCommand,
    CreateInvitationResponse,
    InvitationItem,
    InvitationSummary,
    ListInvitationsResponse,
    ValidateInvitationResponse,
)
from .list_invitations_use_case import ListInvitationsUseCase
from .validate_invitation_use_case import ValidateInvitationUseCase

__all__ = [
    "CreateInvitationUseCase",
    "ValidateInvitationUseCase",
    "AcceptInvitationUseCase",
    "ListInvitationsUseCase",
    "CreateInvitationCommand",
    "CreateInvitationResponse",
    "ValidateInvitationResponse",
    "AcceptInvitationResponse",
    "InvitationSummary",
    "InvitationItem",
    "ListInvitationsResponse",
]
