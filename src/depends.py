from typing import Optional
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.repositories.auth_session_repository import SqlAlchemyAuthSessionRepository
from src.adapter.repositories.user_repository import SqlAlchemyUserRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.auth_event_publisher import AuthEventPublisher
from src.app.use_cases.auth.get_current_session import GetCurrentSession
from src.domain.auth_session import SessionContext

# Local identity used when AUTH_DISABLED is set
ANONYMOUS_CONTEXT = SessionContext(user_id=1, email="local@localhost")

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def init_db(db_engine=None):
    """Create missing tables"""
    async with (db_engine or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_auth_event_publisher(request: Request) -> AuthEventPublisher:
    return request.app.state.auth_events


def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_session_context(
    request: Request,
    token: Optional[str] = Depends(get_bearer_token),
    session: AsyncSession = Depends(get_session),
) -> SessionContext:
    """Resolve the caller's identity from the bearer token"""
    if request.app.state.config.AUTH_DISABLED:
        return ANONYMOUS_CONTEXT

    if not token:
        raise ClientError(
            Error(code="AUTH_ERROR", message="Not signed in", reason="Missing bearer token"),
            status_code=401,
        )

    use_case = GetCurrentSession(
        SqlAlchemyAuthSessionRepository(session),
        SqlAlchemyUserRepository(session),
        uow=SqlAlchemyUnitOfWork(session),
    )
    result = await use_case.execute(token)

    if result.is_err():
        raise ClientError(result.error, status_code=401)

    return result.value
