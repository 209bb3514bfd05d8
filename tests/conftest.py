"""Test config and shared fixtures."""
import os

os.environ.setdefault("APP_ENV", "testing")

import pytest
from typing import AsyncGenerator, Dict
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from main import app
from framework.dependencies import get_db
from framework.repository.unit_of_work import UnitOfWork
from apps.identity.models import Role, User, UserCreate
from apps.identity.service import IdentityService
from apps.orders.service import OrderService
from apps.tasks.service import TaskService
from apps.workspace.service import WorkspaceService


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

PASSWORD = "secret-pass"


@pytest.fixture(scope="function")
async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh, isolated in-memory database per test."""
    import apps.models  # noqa: F401  (registers every table)

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async_session_maker = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
def uow(async_session: AsyncSession) -> UnitOfWork:
    return UnitOfWork(session=async_session)


@pytest.fixture
def identity(uow: UnitOfWork) -> IdentityService:
    return IdentityService(uow)


@pytest.fixture
def orders(uow: UnitOfWork) -> OrderService:
    return OrderService(uow)


@pytest.fixture
def tasks(uow: UnitOfWork) -> TaskService:
    return TaskService(uow)


@pytest.fixture
def workspace(uow: UnitOfWork) -> WorkspaceService:
    return WorkspaceService(uow)


@pytest.fixture
async def owner_a(identity: IdentityService) -> User:
    return await identity.create_user(UserCreate(username="alice", password=PASSWORD, role=Role.ADMIN))


@pytest.fixture
async def owner_b(identity: IdentityService) -> User:
    return await identity.create_user(UserCreate(username="bob", password=PASSWORD, role=Role.EMPLOYEE))


@pytest.fixture
async def viewer(identity: IdentityService) -> User:
    return await identity.create_user(UserCreate(username="victor", password=PASSWORD, role=Role.VIEWER))


@pytest.fixture
async def client(
    async_session: AsyncSession
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the per-test session."""
    async def _get_db():
        yield async_session

    app.dependency_overrides[get_db] = _get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def login(client: AsyncClient, username: str, password: str = PASSWORD) -> Dict[str, str]:
    """Log in and return a bearer header; cookies are dropped so each call picks its own identity."""
    response = await client.post("/api/auth/login", json={"username": username, "password": password})
    body = response.json()
    assert body["code"] == 200, body
    client.cookies.clear()
    return {"Authorization": f"Bearer {body['data']['access_token']}"}
