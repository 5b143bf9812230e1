"""Auth Event Publisher Implementations

Provides the in-process subscription stream for session state changes and
the listeners attached to it.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Set
import httpx
from src.app.services.auth_event_publisher import AuthEventPublisher, AuthEventListener
from src.domain.auth_session import AuthEvent

logger = logging.getLogger(__name__)


class InMemoryAuthEventPublisher(AuthEventPublisher):
    """
    Publisher that fans events out to in-process listeners

    Listeners are awaited one after another in subscription order.
    """

    def __init__(self):
        self.listeners: List[AuthEventListener] = []

    def subscribe(self, listener: AuthEventListener) -> Callable[[], None]:
        self.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    async def publish(self, event: AuthEvent) -> None:
        # Snapshot: listeners may unsubscribe while being notified
        for listener in list(self.listeners):
            try:
                await listener(event)
            except Exception as e:
                logger.error(f"Auth event listener {listener!r} failed: {e}")

    async def close(self) -> None:
        for listener in list(self.listeners):
            drain = getattr(listener, "drain", None)
            if drain is not None:
                await drain()


class LoggingAuthEventListener:
    """
    Listener that logs auth events

    Useful for development and as an audit trail.
    """

    async def __call__(self, event: AuthEvent) -> None:
        logger.info(
            f"[AUTH EVENT] Type: {event.event_type.value}, "
            f"User: {event.user_id} ({event.email}), "
            f"At: {event.occurred_at.isoformat()}"
        )


class WebhookAuthEventListener:
    """
    Listener that POSTs auth events to a webhook

    Sends JSON payload to configured webhook URL. Each POST runs as a
    background task so publishing never waits on the webhook.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook listener

        Args:
            webhook_url: URL to POST events to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.pending: Set[asyncio.Task] = set()

    async def __call__(self, event: AuthEvent) -> None:
        task = asyncio.create_task(self.send(event))
        self.pending.add(task)
        task.add_done_callback(self.pending.discard)

    async def send(self, event: AuthEvent) -> None:
        payload = {
            "type": "auth_event",
            "event_type": event.event_type.value,
            "user_id": event.user_id,
            "email": event.email,
            "occurred_at": event.occurred_at.isoformat(),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                logger.info(
                    f"Webhook notification sent for {event.event_type.value} "
                    f"of user {event.user_id} to {self.webhook_url}"
                )
        except httpx.HTTPError as e:
            logger.error(
                f"Failed to send webhook notification for user {event.user_id}: {e}"
            )

    async def drain(self) -> None:
        """Wait for every in-flight POST to finish"""
        if self.pending:
            await asyncio.gather(*list(self.pending), return_exceptions=True)


class QueueAuthEventListener:
    """
    Listener buffering one user's events in an asyncio queue

    Backs the server-sent events stream. Events are dropped when the
    consumer falls `maxsize` events behind.
    """

    def __init__(self, user_id: int, maxsize: int = 100):
        self.user_id = user_id
        self.queue: asyncio.Queue[AuthEvent] = asyncio.Queue(maxsize=maxsize)

    async def __call__(self, event: AuthEvent) -> None:
        if event.user_id != self.user_id:
            return
        try:
            self.queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning(f"Auth event queue full for user {self.user_id}, dropping event")

    async def get(self) -> AuthEvent:
        return await self.queue.get()


def create_auth_event_publisher(webhook_url: Optional[str] = None) -> AuthEventPublisher:
    """
    Factory function to create the application's auth event publisher

    Args:
        webhook_url: Optional webhook URL. If provided, events are also
                     POSTed there. Events are always logged.

    Returns:
        Configured AuthEventPublisher
    """
    publisher = InMemoryAuthEventPublisher()
    publisher.subscribe(LoggingAuthEventListener())

    if webhook_url:
        publisher.subscribe(WebhookAuthEventListener(webhook_url))

    return publisher
