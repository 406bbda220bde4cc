from typing import Optional
from uuid import UUID

from underneath.app.services.unit_of_work import UnitOfWork
from underneath.domain.entities import Connection, User

from .dtos import ConnectionInfo, PartnerInfo, TerminatedConnection, UserSummary


async def connection_info_for(
    uow: UnitOfWork, connection: Connection, viewer_id: UUID
) -> Optional[ConnectionInfo]:
    """Build the viewer's view of a connection, with a partner summary"""
    partner_id, partner_role = connection.partner_of(viewer_id)
    partner = await uow.users.get_by_id(partner_id)
    if partner is None:
        return None

    return ConnectionInfo(
        id=str(connection.id),
        status=connection.status.value,
        created_at=connection.created_at.isoformat(),
        partner=PartnerInfo(
            id=str(partner.id),
            email=partner.email,
            display_name=partner.display_name,
            role=partner_role.value,
        ),
    )


def user_summary(user: Optional[User]) -> Optional[UserSummary]:
    if user is None:
        return None
    return UserSummary(id=str(user.id), email=user.email, display_name=user.display_name)


def terminated_connection(connection: Connection) -> TerminatedConnection:
    return TerminatedConnection(
        id=str(connection.id),
        status=connection.status.value,
        terminated_at=connection.terminated_at.isoformat(),
    )
