"""
Invitation Entity

Single-use codes a DOM hands to a prospective SUB.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class Invitation(SQLModel, table=True):
    """
    Invitation entity.

    Business Rules:
    - Code is 8 uppercase alphanumeric characters, unique
    - Redeemable only while is_active and before expires_at
    - Consumed exactly once; is_active is cleared on acceptance
    - Expiry is checked lazily on validation, there is no sweep
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    code: str = Field(unique=True, index=True, min_length=8, max_length=8)
    dom_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    email: Optional[str] = Field(default=None, max_length=255)
    message: Optional[str] = Field(default=None, max_length=500)

    is_active: bool = Field(default=True)
    accepted_by_id: Optional[UUID] = Field(default=None, foreign_key="users.id")

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_expires_at", "expires_at"),
        Index("idx_invitation_dom_email", "dom_id", "email"),
    )

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
