"""Auth Event Publisher Interface

Defines the change-notification stream for session state.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable
from src.domain.auth_session import AuthEvent

AuthEventListener = Callable[[AuthEvent], Awaitable[None]]


class AuthEventPublisher(ABC):
    """
    Publishes sign-up, sign-in and sign-out events to subscribers

    Implementations can deliver to:
    - In-process callbacks
    - Log output
    - Webhooks
    - Server-sent event streams
    """

    @abstractmethod
    def subscribe(self, listener: AuthEventListener) -> Callable[[], None]:
        """
        Register a listener

        Args:
            listener: Async callable receiving each AuthEvent

        Returns:
            Callable that removes the listener again
        """
        pass

    @abstractmethod
    async def publish(self, event: AuthEvent) -> None:
        """
        Deliver an event to every current listener

        A failing listener never prevents delivery to the others.
        """
        pass

    async def close(self) -> None:
        """Wait for deliveries still in flight; called on shutdown"""
        return None
