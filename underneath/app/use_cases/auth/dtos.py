"""
Authentication Use Case DTOs (Data Transfer Objects)

Response classes for the auth domain.
"""

from pydantic import BaseModel

from .register_dto import UserInfo


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str
    session_id: str


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    status: str


class MeResponse(BaseModel):
    """Response for current-user lookup"""

    user: UserInfo
    status: str
