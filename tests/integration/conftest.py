import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.depends import get_session


class TestConfig(ApplicationConfig):
    AUTO_CREATE_TABLES = False
    AUTH_DISABLED = True
    ENABLE_SENTRY = 0
    ENABLE_LOGGING_MIDDLEWARE = False
    AUTH_EVENTS_WEBHOOK = None


class AuthEnabledTestConfig(TestConfig):
    AUTH_DISABLED = False


@pytest_asyncio.fixture(scope="function")
async def engine():
    """Create test database engine on a private in-memory SQLite database"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


async def _client_for(config, db_session):
    from src.api.app import create_app

    app = create_app(config)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    return app


@pytest_asyncio.fixture
async def client(db_session):
    """Test client acting as the local user (authentication disabled)"""
    app = await _client_for(TestConfig, db_session)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def auth_app(db_session):
    return await _client_for(AuthEnabledTestConfig, db_session)


@pytest_asyncio.fixture
async def auth_client(auth_app):
    """Test client that must sign in"""
    async with AsyncClient(transport=ASGITransport(app=auth_app), base_url="http://test") as ac:
        yield ac
