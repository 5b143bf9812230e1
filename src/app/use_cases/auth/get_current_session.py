"""
Get Current Session Use Case

Resolves a bearer token to the caller's SessionContext.
"""
import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.user_repository import UserRepository
from src.app.repositories.auth_session_repository import AuthSessionRepository
from src.domain.auth_session import AuthSession, SessionContext

logger = logging.getLogger(__name__)


class GetCurrentSession:
    """
    Use case: Current session

    An expired session is reported and, when a unit of work is given,
    deleted.
    """

    def __init__(
        self,
        session_repo: AuthSessionRepository,
        user_repo: UserRepository,
        uow: Optional[UnitOfWork] = None,
    ):
        self.session_repo = session_repo
        self.user_repo = user_repo
        self.uow = uow

    async def execute(self, token: str) -> Result[SessionContext]:
        auth_session = await self.session_repo.get_by_token(token) if token else None

        if not auth_session:
            return Return.err(
                Error(
                    code="AUTH_ERROR",
                    message="Not signed in",
                    reason="Unknown session token",
                )
            )

        if auth_session.is_expired():
            await self.discard(auth_session)
            return Return.err(
                Error(
                    code="AUTH_ERROR",
                    message="Session expired",
                    reason=f"Session expired at {auth_session.expires_at.isoformat()}",
                )
            )

        user = await self.user_repo.get_by_id(auth_session.user_id)
        if not user:
            return Return.err(
                Error(
                    code="AUTH_ERROR",
                    message="Not signed in",
                    reason="Session user no longer exists",
                )
            )

        return Return.ok(
            SessionContext(
                user_id=user.id,
                email=user.email,
                token=auth_session.token,
                expires_at=auth_session.expires_at,
            )
        )

    async def discard(self, auth_session: AuthSession) -> None:
        if self.uow is None:
            return
        try:
            await self.session_repo.delete(auth_session)
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            logger.warning(f"Failed to delete expired session of user {auth_session.user_id}: {e}")
