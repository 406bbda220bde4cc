from abc import ABC, abstractmethod

from underneath.app.repositories.connection_repository import IConnectionRepository
from underneath.app.repositories.invitation_repository import IInvitationRepository
from underneath.app.repositories.point_account_repository import IPointAccountRepository
from underneath.app.repositories.profile_repository import IProfileRepository
from underneath.app.repositories.session_repository import ISessionRepository
from underneath.app.repositories.stage_entity_repository import IStageEntityRepository
from underneath.app.repositories.stage_repository import IStageRepository
from underneath.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    sessions: ISessionRepository
    invitations: IInvitationRepository
    connections: IConnectionRepository
    stages: IStageRepository
    stage_entities: IStageEntityRepository
    point_accounts: IPointAccountRepository
    profiles: IProfileRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
