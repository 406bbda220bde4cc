"""
Connection Entity

The one-to-one link between a DOM and a SUB.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import ConnectionStatus, UserRole

ACTIVE_ONLY = text("status = 'ACTIVE'")


class Connection(SQLModel, table=True):
    """
    Connection entity.

    Business Rules:
    - At most one ACTIVE connection per DOM and per SUB
      (partial unique indexes back the pre-insert checks)
    - ACTIVE -> TERMINATED is terminal; reconnecting needs a new invitation
    """

    __tablename__ = "connections"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    dom_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    sub_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    status: ConnectionStatus = Field(default=ConnectionStatus.ACTIVE)
    terminated_by_id: Optional[UUID] = Field(default=None, foreign_key="users.id")

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    terminated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_connection_active_dom",
            "dom_id",
            unique=True,
            sqlite_where=ACTIVE_ONLY,
            postgresql_where=ACTIVE_ONLY,
        ),
        Index(
            "uq_connection_active_sub",
            "sub_id",
            unique=True,
            sqlite_where=ACTIVE_ONLY,
            postgresql_where=ACTIVE_ONLY,
        ),
        Index("idx_connection_status", "status"),
    )

    def partner_of(self, user_id: UUID) -> tuple[UUID, UserRole]:
        """Partner id and the partner's role, seen from user_id."""
        if user_id == self.dom_id:
            return self.sub_id, UserRole.SUB
        return self.dom_id, UserRole.DOM
