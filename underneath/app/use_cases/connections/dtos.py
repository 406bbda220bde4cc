"""
Connection Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional
from pydantic import BaseModel


class PartnerInfo(BaseModel):
    """The other party of a connection"""

    id: str
    email: str
    display_name: Optional[str] = None
    role: str


class ConnectionInfo(BaseModel):
    """A connection seen from one of its parties"""

    id: str
    status: str
    created_at: str
    partner: PartnerInfo


class MyConnectionResponse(BaseModel):
    """Response for get-my-connection use case"""

    has_connection: bool
    connection: Optional[ConnectionInfo] = None


class TerminatedConnection(BaseModel):
    id: str
    status: str
    terminated_at: str


class TerminateConnectionResponse(BaseModel):
    """Response for terminate connection use cases"""

    success: bool
    connection: TerminatedConnection


class AvailabilityResponse(BaseModel):
    """Response for availability check use case"""

    can_create_connection: bool
    has_active_connection: bool
    current_connection: Optional[ConnectionInfo] = None


class UserSummary(BaseModel):
    id: str
    email: str
    display_name: Optional[str] = None


class ConnectionAdminInfo(BaseModel):
    """Connection with both parties, for administrators"""

    id: str
    status: str
    created_at: str
    updated_at: str
    dom: Optional[UserSummary] = None
    sub: Optional[UserSummary] = None


class ListConnectionsResponse(BaseModel):
    connections: List[ConnectionAdminInfo]
    limit: int
    offset: int
    total: int
