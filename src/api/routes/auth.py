"""Auth API Routes

FastAPI routes for sign-up, sign-in, sign-out and the session stream.
"""

import asyncio
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import StreamingResponse
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Error
from src.app.services.auth_event_publisher import AuthEventPublisher
from src.app.use_cases.auth import (
    SignIn,
    SignInCommandDTO,
    SignOut,
    SignOutResponseDTO,
    SignUp,
    SignUpCommandDTO,
    UserResponseDTO,
)
from src.adapter.repositories.auth_session_repository import SqlAlchemyAuthSessionRepository
from src.adapter.repositories.user_repository import SqlAlchemyUserRepository
from src.adapter.services.auth_event_publisher import QueueAuthEventListener
from src.adapter.services.password_hasher import Pbkdf2PasswordHasher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.schemas.auth_request import CredentialsRequestSchema
from src.depends import get_auth_event_publisher, get_bearer_token, get_session, get_session_context
from src.domain.auth_session import AuthEvent, SessionContext

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

# Seconds between keep-alive comments on the event stream
KEEPALIVE_INTERVAL = 15.0

AUTH_ERROR_RESPONSE = {
    401: {
        "description": "Authentication failed",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "AUTH_ERROR",
                        "message": "Invalid login credentials"
                    }
                }
            }
        }
    }
}


def raise_for_auth_error(result) -> None:
    if result.is_err():
        if result.error.code == "AUTH_ERROR":
            raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ClientError(result.error)


def format_sse(event: AuthEvent) -> str:
    return f"event: {event.event_type.value}\ndata: {event.model_dump_json()}\n\n"


@router.post(
    "/sign-up",
    response_model=UserResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses=AUTH_ERROR_RESPONSE,
)
async def sign_up(
    http_request: Request,
    request: CredentialsRequestSchema,
    session: AsyncSession = Depends(get_session),
    publisher: AuthEventPublisher = Depends(get_auth_event_publisher),
):
    """
    Create an account.

    The email must be unused and the password at least MIN_PASSWORD_LENGTH
    characters long. Sign in afterwards to obtain a session token.
    """
    use_case = SignUp(
        uow=SqlAlchemyUnitOfWork(session),
        user_repo=SqlAlchemyUserRepository(session),
        password_hasher=Pbkdf2PasswordHasher(),
        event_publisher=publisher,
        min_password_length=http_request.app.state.config.MIN_PASSWORD_LENGTH,
    )
    result = await use_case.execute(
        SignUpCommandDTO(email=request.email, password=request.password)
    )

    raise_for_auth_error(result)
    return result.value


@router.post(
    "/sign-in",
    response_model=SessionContext,
    status_code=status.HTTP_200_OK,
    responses=AUTH_ERROR_RESPONSE,
)
async def sign_in(
    http_request: Request,
    request: CredentialsRequestSchema,
    session: AsyncSession = Depends(get_session),
    publisher: AuthEventPublisher = Depends(get_auth_event_publisher),
):
    """
    Sign in with email and password.

    **Example response:**
    ```json
    {
      "user_id": 1,
      "email": "name@example.com",
      "token": "Vq3...",
      "expires_at": "2024-05-08T12:00:00"
    }
    ```

    Send the token as `Authorization: Bearer <token>` on later requests.
    """
    use_case = SignIn(
        uow=SqlAlchemyUnitOfWork(session),
        user_repo=SqlAlchemyUserRepository(session),
        session_repo=SqlAlchemyAuthSessionRepository(session),
        password_hasher=Pbkdf2PasswordHasher(),
        event_publisher=publisher,
        session_ttl_seconds=http_request.app.state.config.SESSION_TTL_SECONDS,
    )
    result = await use_case.execute(
        SignInCommandDTO(email=request.email, password=request.password)
    )

    raise_for_auth_error(result)
    return result.value


@router.post(
    "/sign-out",
    response_model=SignOutResponseDTO,
    status_code=status.HTTP_200_OK,
    responses=AUTH_ERROR_RESPONSE,
)
async def sign_out(
    token: Optional[str] = Depends(get_bearer_token),
    session: AsyncSession = Depends(get_session),
    publisher: AuthEventPublisher = Depends(get_auth_event_publisher),
):
    """End the session behind the bearer token"""
    if not token:
        raise ClientError(
            Error(code="AUTH_ERROR", message="Not signed in", reason="Missing bearer token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    use_case = SignOut(
        uow=SqlAlchemyUnitOfWork(session),
        session_repo=SqlAlchemyAuthSessionRepository(session),
        user_repo=SqlAlchemyUserRepository(session),
        event_publisher=publisher,
    )
    result = await use_case.execute(token)

    raise_for_auth_error(result)
    return result.value


@router.get(
    "/session",
    response_model=SessionContext,
    status_code=status.HTTP_200_OK,
    responses=AUTH_ERROR_RESPONSE,
)
async def get_current_session(
    context: SessionContext = Depends(get_session_context),
):
    """Identity behind the bearer token"""
    return context


@router.get(
    "/events",
    responses={
        200: {
            "content": {"text/event-stream": {}},
            "description": "Server-sent auth events of the signed-in user"
        },
        **AUTH_ERROR_RESPONSE,
    }
)
async def stream_auth_events(
    request: Request,
    context: SessionContext = Depends(get_session_context),
    publisher: AuthEventPublisher = Depends(get_auth_event_publisher),
):
    """
    Stream session changes as server-sent events.

    Emits `signed_in` and `signed_out` events for the caller's account so an
    open page can react when the session changes elsewhere.
    """
    listener = QueueAuthEventListener(context.user_id)
    unsubscribe = publisher.subscribe(listener)

    async def event_stream():
        try:
            while not await request.is_disconnected():
                try:
                    event = await asyncio.wait_for(listener.get(), timeout=KEEPALIVE_INTERVAL)
                except asyncio.TimeoutError:
                    yield ": keep-alive\n\n"
                    continue
                yield format_sse(event)
        finally:
            unsubscribe()
            logger.debug(f"Auth event stream closed for user {context.user_id}")

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
