"""SignIn Use Case

Verifies credentials and opens a session.
"""

import logging
from datetime import timedelta
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.password_hasher import PasswordHasher
from src.app.services.auth_event_publisher import AuthEventPublisher
from src.app.repositories.user_repository import UserRepository
from src.app.repositories.auth_session_repository import AuthSessionRepository
from src.domain.auth_session import AuthSession, AuthEvent, AuthEventType, SessionContext
from src.domain.base import generate_token, utc_now
from .dtos import SignInCommandDTO

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error(
    code="AUTH_ERROR",
    message="Invalid login credentials",
    reason="Unknown email or wrong password",
)


class SignIn:
    """
    Use Case: Sign in with email and password

    Business Rules:
    1. Unknown email and wrong password give the same error
    2. A new session token is issued per sign-in, valid for session_ttl_seconds
    3. Sessions that have already expired are deleted on sign-in
    4. A signed_in event is published after commit

    Flow:
    1. Load user by email
    2. Verify password hash
    3. Purge expired sessions, create session and commit
    4. Publish event, return session context
    """

    def __init__(
        self,
        uow: UnitOfWork,
        user_repo: UserRepository,
        session_repo: AuthSessionRepository,
        password_hasher: PasswordHasher,
        event_publisher: AuthEventPublisher,
        session_ttl_seconds: int = 7 * 24 * 3600,
    ):
        self.uow = uow
        self.user_repo = user_repo
        self.session_repo = session_repo
        self.password_hasher = password_hasher
        self.event_publisher = event_publisher
        self.session_ttl_seconds = session_ttl_seconds

    async def execute(self, command: SignInCommandDTO) -> Result[SessionContext]:
        try:
            # Step 1: Load user
            user = await self.user_repo.get_by_email(command.email)

            # Step 2: Verify password
            if not user or not self.password_hasher.verify(command.password, user.password_hash):
                logger.info(f"Rejected sign-in for {command.email}")
                return Return.err(INVALID_CREDENTIALS)

            # Step 3: Purge expired sessions and create a new one
            now = utc_now()
            purged = await self.session_repo.delete_expired(now)
            if purged:
                logger.info(f"Deleted {purged} expired session(s)")

            auth_session = await self.session_repo.create(
                AuthSession(
                    token=generate_token(),
                    user_id=user.id,
                    created_at=now,
                    expires_at=now + timedelta(seconds=self.session_ttl_seconds),
                )
            )
            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to sign in {command.email}: {e}")
            return Return.err(
                Error(
                    code="PERSISTENCE_ERROR",
                    message="Failed to sign in",
                    reason=str(e),
                )
            )

        # Step 4: Publish and respond
        await self.event_publisher.publish(
            AuthEvent(
                event_type=AuthEventType.SIGNED_IN,
                user_id=user.id,
                email=user.email,
                occurred_at=now,
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
