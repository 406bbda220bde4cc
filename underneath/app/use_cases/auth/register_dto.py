"""
Register Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- RegisterCommand: Input to use case
- AuthResponse: Output from register and login
"""

from typing import Optional
from pydantic import BaseModel


class RegisterCommand(BaseModel):
    """
    Register command - represents a registration intent

    Created by API layer. Field rules are checked by the use case so that
    every violation can be reported together.
    """

    email: str
    password: str
    confirm_password: str
    role: str
    display_name: Optional[str] = None


class UserInfo(BaseModel):
    """User information in authentication responses"""

    id: str
    email: str
    role: str
    display_name: Optional[str] = None


class AuthResponse(BaseModel):
    """Tokens plus the authenticated user"""

    user: UserInfo
    access_token: str
    refresh_token: str
    session_id: str
