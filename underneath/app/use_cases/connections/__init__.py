"""
Connection Use Cases

Reading, checking and ending DOM/SUB connections.
"""

from .admin_terminate_connection_use_case import AdminTerminateConnectionUseCase
from .check_availability_use_case import CheckAvailabilityUseCase
from .dtos import (
    AvailabilityResponse,
    ConnectionAdminInfo,
    ConnectionInfo,
    ListConnectionsResponse,
    MyConnectionResponse,
    PartnerInfo,
    TerminateConnectionResponse,
    TerminatedConnection,
    UserSummary,
)
from .get_my_connection_use_case import GetMyConnectionUseCase
from .list_connections_use_case import ListConnectionsUseCase
from .terminate_connection_use_case import TerminateConnectionUseCase

__all__ = [
    # Use Cases
    "GetMyConnectionUseCase",
    "TerminateConnectionUseCase",
    "CheckAvailabilityUseCase",
    "ListConnectionsUseCase",
    "AdminTerminateConnectionUseCase",
    # DTOs
    "ConnectionInfo",
    "PartnerInfo",
    "MyConnectionResponse",
    "TerminateConnectionResponse",
    "TerminatedConnection",
    "AvailabilityResponse",
    "UserSummary",
    "ConnectionAdminInfo",
    "ListConnectionsResponse",
]
