from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from underneath.app.repositories.connection_repository import IConnectionRepository
from underneath.domain.entities import Connection, ConnectionStatus
from underneath.domain.exceptions import ActiveConnectionExists


class ConnectionRepository(IConnectionRepository):
    """Connection repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, connection_id: UUID) -> Optional[Connection]:
        """Get connection by ID"""
        stmt = select(Connection).where(Connection.id == connection_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_user(self, user_id: UUID) -> Optional[Connection]:
        stmt = select(Connection).where(
            or_(Connection.dom_id == user_id, Connection.sub_id == user_id),
            Connection.status == ConnectionStatus.ACTIVE,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_active_by_dom(self, dom_id: UUID) -> Optional[Connection]:
        stmt = select(Connection).where(
            Connection.dom_id == dom_id,
            Connection.status == ConnectionStatus.ACTIVE,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_active_by_sub(self, sub_id: UUID) -> Optional[Connection]:
        stmt = select(Connection).where(
            Connection.sub_id == sub_id,
            Connection.status == ConnectionStatus.ACTIVE,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_all(self, limit: int, offset: int) -> List[Connection]:
        stmt = (
            select(Connection)
            .order_by(Connection.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_all(self) -> int:
        stmt = select(func.count(Connection.id))
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, connection: Connection) -> Connection:
        """Create a new connection"""
        self.session.add(connection)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ActiveConnectionExists(str(exc.orig)) from exc
        await self.session.refresh(connection)
        return connection

    async def update(self, connection: Connection) -> Connection:
        """Update existing connection"""
        self.session.add(connection)
        await self.session.flush()
        await self.session.refresh(connection)
        return connection
