"""SQLAlchemy Auth Session Repository Implementation"""

from datetime import datetime
from typing import Optional
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.auth_session_repository import AuthSessionRepository
from src.domain.auth_session import AuthSession


class SqlAlchemyAuthSessionRepository(AuthSessionRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, auth_session: AuthSession) -> AuthSession:
        self.session.add(auth_session)
        await self.session.flush()
        await self.session.refresh(auth_session)
        return auth_session

    async def get_by_token(self, token: str) -> Optional[AuthSession]:
        statement = select(AuthSession).where(AuthSession.token == token)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def delete(self, auth_session: AuthSession) -> None:
        await self.session.delete(auth_session)
        await self.session.flush()

    async def delete_expired(self, now: datetime) -> int:
        result = await self.session.execute(
            delete(AuthSession)
            .where(AuthSession.expires_at <= now)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.flush()
        return result.rowcount or 0
