from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from underneath.app.repositories.point_account_repository import IPointAccountRepository
from underneath.domain.entities import PointAccount


class PointAccountRepository(IPointAccountRepository):
    """Point account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: UUID) -> Optional[PointAccount]:
        stmt = select(PointAccount).where(PointAccount.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, account: PointAccount) -> PointAccount:
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def update(self, account: PointAccount) -> PointAccount:
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account
