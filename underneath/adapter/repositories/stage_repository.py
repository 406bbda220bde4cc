from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from underneath.app.repositories.stage_repository import IStageRepository
from underneath.domain.base import utcnow
from underneath.domain.entities import Stage
from underneath.domain.exceptions import ActiveStageExists, StageNumberExists


class StageRepository(IStageRepository):
    """Stage repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, stage_id: UUID) -> Optional[Stage]:
        """Get stage by ID"""
        stmt = select(Stage).where(Stage.id == stage_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_number(self, stage_number: int) -> Optional[Stage]:
        """Get stage by stage number"""
        stmt = select(Stage).where(Stage.stage_number == stage_number)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_all(self) -> List[Stage]:
        stmt = select(Stage).order_by(Stage.stage_number)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_sub_active(self) -> Optional[Stage]:
        stmt = select(Stage).where(Stage.is_sub_active == True)  # noqa: E712
        result = await self.session.exec(stmt)
        return result.first()

    async def deactivate_sub_active_except(self, stage_id: UUID) -> int:
        stmt = (
            update(Stage)
            .where(Stage.id != stage_id, Stage.is_sub_active == True)  # noqa: E712
            .values(is_sub_active=False, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # The violated index is named in the driver message
            if "stage_number" in str(exc.orig):
                raise StageNumberExists(str(exc.orig)) from exc
            raise ActiveStageExists(str(exc.orig)) from exc

    async def create(self, stage: Stage) -> Stage:
        """Create a new stage"""
        self.session.add(stage)
        await self._flush()
        await self.session.refresh(stage)
        return stage

    async def update(self, stage: Stage) -> Stage:
        """Update existing stage"""
        self.session.add(stage)
        await self._flush()
        await self.session.refresh(stage)
        return stage

    async def delete(self, stage: Stage) -> None:
        await self.session.delete(stage)
        await self.session.flush()
