from sqlmodel.ext.asyncio.session import AsyncSession

from underneath.adapter.repositories.connection_repository import ConnectionRepository
from underneath.adapter.repositories.invitation_repository import InvitationRepository
from underneath.adapter.repositories.point_account_repository import PointAccountRepository
from underneath.adapter.repositories.profile_repository import ProfileRepository
from underneath.adapter.repositories.session_repository import SessionRepository
from underneath.adapter.repositories.stage_entity_repository import StageEntityRepository
from underneath.adapter.repositories.stage_repository import StageRepository
from underneath.adapter.repositories.user_repository import UserRepository
from underneath.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.connections = ConnectionRepository(self.session)
        self.stages = StageRepository(self.session)
        self.stage_entities = StageEntityRepository(self.session)
        self.point_accounts = PointAccountRepository(self.session)
        self.profiles = ProfileRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
