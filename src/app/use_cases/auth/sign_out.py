"""SignOut Use Case

Ends a session.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.auth_event_publisher import AuthEventPublisher
from src.app.repositories.user_repository import UserRepository
from src.app.repositories.auth_session_repository import AuthSessionRepository
from src.domain.auth_session import AuthEvent, AuthEventType
from src.domain.base import utc_now
from .dtos import SignOutResponseDTO


class SignOut:
    """
    Use Case: Sign out

    Deletes the session behind the token and publishes signed_out.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_repo: AuthSessionRepository,
        user_repo: UserRepository,
        event_publisher: AuthEventPublisher,
    ):
        self.uow = uow
        self.session_repo = session_repo
        self.user_repo = user_repo
        self.event_publisher = event_publisher

    async def execute(self, token: str) -> Result[SignOutResponseDTO]:
        try:
            auth_session = await self.session_repo.get_by_token(token)
            if not auth_session:
                return Return.err(
                    Error(
                        code="AUTH_ERROR",
                        message="Not signed in",
                        reason="Unknown session token",
                    )
                )

            user = await self.user_repo.get_by_id(auth_session.user_id)
            await self.session_repo.delete(auth_session)
            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PERSISTENCE_ERROR",
                    message="Failed to sign out",
                    reason=str(e),
                )
            )

        if user:
            await self.event_publisher.publish(
                AuthEvent(
                    event_type=AuthEventType.SIGNED_OUT,
                    user_id=user.id,
                    email=user.email,
                    occurred_at=utc_now(),
                )
            )

        return Return.ok(SignOutResponseDTO())
