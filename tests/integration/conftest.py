from typing import List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from underneath.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from underneath.api.utils.rate_limit import reset_rate_limits
from underneath.app.services.email_sender import EmailSender
from underneath.depends import get_email_sender, get_unit_of_work


class RecordingEmailSender(EmailSender):
    """Collects invitation emails instead of sending them"""

    def __init__(self):
        self.sent: List[dict] = []

    async def send_invitation_email(
        self, to_email: str, code: str, dom_name: str, message: Optional[str] = None
    ) -> bool:
        self.sent.append(
            {"to": to_email, "code": code, "dom_name": dom_name, "message": message}
        )
        return True


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest_asyncio.fixture
async def client(db_session, email_sender):
    from underneath.api.app import create_app
    from config import ApplicationConfig

    reset_rate_limits()
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
