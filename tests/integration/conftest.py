import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import portal.domain.entities  # noqa: F401  registers every table on SQLModel.metadata
from config import ApplicationConfig
from portal.adapter.services.email_sender import LoggingEmailSender
from portal.adapter.services.object_storage import LocalObjectStorage
from portal.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from portal.app.services.change_feed import ChangeFeed
from portal.depends import (
    get_change_feed,
    get_drive_access_checker,
    get_email_sender,
    get_object_storage,
    get_session_factory,
    get_unit_of_work,
)
from tests.utils.fakes import FakeDriveAccessChecker
from tests.utils.http import admin_headers, bearer

ADMIN_EMAIL = "admin@portal-admin.com"
ADMIN_PASSWORD = "AdminPass123!"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def change_feed():
    return ChangeFeed()


@pytest.fixture
def outbox():
    return LoggingEmailSender()


@pytest.fixture
def drive_access():
    return FakeDriveAccessChecker()


@pytest_asyncio.fixture
async def client(session_factory, change_feed, outbox, drive_access, tmp_path):
    from portal.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session, change_feed)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_change_feed] = lambda: change_feed
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_email_sender] = lambda: outbox
    app.dependency_overrides[get_drive_access_checker] = lambda: drive_access
    app.dependency_overrides[get_object_storage] = lambda: LocalObjectStorage(
        root=str(tmp_path), public_url="http://test/storage"
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_token(client: AsyncClient) -> str:
    response = await client.post(
        "/admin/principals",
        json={
            "email": ADMIN_EMAIL,
            "password": ADMIN_PASSWORD,
            "profile_data": {"role": "admin", "full_name": "Portal Admin"},
        },
        headers=admin_headers(),
    )
    assert response.status_code == 201

    response = await client.post(
        "/auth/signin", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    return response.json()["access_token"]


@pytest_asyncio.fixture
async def acme(client: AsyncClient, admin_token: str) -> dict:
    """A client account created by the admin, with its invitation emailed."""
    response = await client.post(
        "/clients",
        json={
            "client_name": "Acme Corp",
            "email": "owner@acme.com",
            "agent_name": "Acme Bot",
            "company": "Acme",
        },
        headers=bearer(admin_token),
    )
    assert response.status_code == 201
    return response.json()["client"]
