from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.database import build_engine
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_object_storage, get_outbound_dispatcher, get_unit_of_work
from src.domain.entities import Aggressor, Guardian, IdentityStatus
from tests.fixtures.fakes import InMemoryObjectStorage, RecordingDispatcher
from tests.fixtures.identities import NORMAL_PASSWORD, make_identity
from tests.fixtures.json_loader import TestDataLoader


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest.fixture(autouse=True)
def cheap_bcrypt(monkeypatch):
    monkeypatch.setattr("config.ApplicationConfig.BCRYPT_ROUNDS", 4)


@pytest_asyncio.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite:///./test.db")
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
def storage():
    return InMemoryObjectStorage()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest_asyncio.fixture
async def client(db_session, storage, dispatcher):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_object_storage] = lambda: storage
    app.dependency_overrides[get_outbound_dispatcher] = lambda: dispatcher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def identity(db_session, test_data):
    identity = make_identity()
    db_session.add(identity)
    await db_session.flush()

    for guardian in test_data.get_copy("guardians"):
        db_session.add(Guardian(user_id=identity.id, **guardian))
    db_session.add(Aggressor(user_id=identity.id, **test_data.get_copy("aggressor")))

    await db_session.commit()
    # Plain values; ORM instances expire when a request rolls back the shared session
    return SimpleNamespace(id=identity.id, email=identity.email)


@pytest_asyncio.fixture
async def inactive_identity(db_session, test_data):
    data = test_data.get("inactive_identity")
    identity = make_identity(email=data["email"], status=IdentityStatus.bloqueado)
    db_session.add(identity)
    await db_session.commit()
    return SimpleNamespace(id=identity.id, email=identity.email)


@pytest_asyncio.fixture
async def login(client, identity):
    async def _login(password: str = NORMAL_PASSWORD) -> dict:
        response = await client.post(
            "/mobile-api",
            json={"action": "loginCustomizado", "email": identity.email, "senha": password},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _login


@pytest_asyncio.fixture
async def session_token(login):
    data = await login()
    return data["session"]["token"]
