"""SignUp Use Case

Creates a user account.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.password_hasher import PasswordHasher
from src.app.services.auth_event_publisher import AuthEventPublisher
from src.app.repositories.user_repository import UserRepository
from src.domain.auth_session import AuthEvent, AuthEventType
from src.domain.base import utc_now
from src.domain.user import User, is_valid_email, normalize_email
from .dtos import SignUpCommandDTO, UserResponseDTO

logger = logging.getLogger(__name__)


class SignUp:
    """
    Use Case: Sign up

    Business Rules:
    1. Email must be well-formed and not already registered
    2. Password must have at least min_password_length characters
    3. Only a hash of the password is stored
    4. A signed_up event is published after commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        user_repo: UserRepository,
        password_hasher: PasswordHasher,
        event_publisher: AuthEventPublisher,
        min_password_length: int = 6,
    ):
        self.uow = uow
        self.user_repo = user_repo
        self.password_hasher = password_hasher
        self.event_publisher = event_publisher
        self.min_password_length = min_password_length

    async def execute(self, command: SignUpCommandDTO) -> Result[UserResponseDTO]:
        email = normalize_email(command.email)

        if not is_valid_email(email):
            return Return.err(
                Error(
                    code="AUTH_ERROR",
                    message="Unable to validate email address: invalid format",
                    reason="Malformed email",
                )
            )

        if len(command.password) < self.min_password_length:
            return Return.err(
                Error(
                    code="AUTH_ERROR",
                    message=f"Password should be at least {self.min_password_length} characters",
                    reason="Password too short",
                )
            )

        try:
            if await self.user_repo.get_by_email(email):
                return Return.err(
                    Error(
                        code="AUTH_ERROR",
                        message="User already registered",
                        reason="Duplicate email",
                    )
                )

            user = await self.user_repo.create(
                User(
                    email=email,
                    password_hash=self.password_hasher.hash(command.password),
                )
            )
            await self.uow.commit()

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create account for {email}: {e}")
            return Return.err(
                Error(
                    code="PERSISTENCE_ERROR",
                    message="Failed to create account",
                    reason=str(e),
                )
            )

        await self.event_publisher.publish(
            AuthEvent(
                event_type=AuthEventType.SIGNED_UP,
                user_id=user.id,
                email=user.email,
                occurred_at=utc_now(),
            )
        )

        return Return.ok(
            UserResponseDTO(user_id=user.id, email=user.email, created_at=user.created_at)
        )
