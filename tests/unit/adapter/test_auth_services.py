"""Unit tests for the password hasher and auth event publisher"""

import asyncio
import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from src.adapter.services.auth_event_publisher import (
    InMemoryAuthEventPublisher,
    QueueAuthEventListener,
    WebhookAuthEventListener,
    create_auth_event_publisher,
)
from src.adapter.services.password_hasher import Pbkdf2PasswordHasher
from src.domain.auth_session import AuthEvent, AuthEventType


def make_event(user_id=3, event_type=AuthEventType.SIGNED_IN):
    return AuthEvent(
        event_type=event_type,
        user_id=user_id,
        email="name@example.com",
        occurred_at=datetime(2024, 5, 1, 12, 0),
    )


class TestPbkdf2PasswordHasher:

    def test_hash_and_verify(self):
        hasher = Pbkdf2PasswordHasher(iterations=1000)

        encoded = hasher.hash("s3cret-pass")

        assert encoded.startswith("pbkdf2_sha256$1000$")
        assert hasher.verify("s3cret-pass", encoded)
        assert not hasher.verify("wrong", encoded)

    def test_salted(self):
        hasher = Pbkdf2PasswordHasher(iterations=1000)

        assert hasher.hash("same") != hasher.hash("same")

    def test_malformed_hash(self):
        hasher = Pbkdf2PasswordHasher(iterations=1000)

        assert not hasher.verify("s3cret-pass", "plain-text")
        assert not hasher.verify("s3cret-pass", "md5$1$salt$abc")


@pytest.mark.asyncio
class TestInMemoryAuthEventPublisher:

    async def test_publish_to_subscribers(self):
        publisher = InMemoryAuthEventPublisher()
        first, second = AsyncMock(), AsyncMock()
        publisher.subscribe(first)
        publisher.subscribe(second)

        event = make_event()
        await publisher.publish(event)

        first.assert_called_once_with(event)
        second.assert_called_once_with(event)

    async def test_unsubscribe(self):
        publisher = InMemoryAuthEventPublisher()
        listener = AsyncMock()
        unsubscribe = publisher.subscribe(listener)

        unsubscribe()
        await publisher.publish(make_event())

        listener.assert_not_called()

    async def test_failing_listener_does_not_block_others(self):
        """
        Given: The first listener raises
        When: An event is published
        Then: The second listener still receives it
        """
        # Arrange
        publisher = InMemoryAuthEventPublisher()
        publisher.subscribe(AsyncMock(side_effect=RuntimeError("boom")))
        healthy = AsyncMock()
        publisher.subscribe(healthy)

        # Act
        await publisher.publish(make_event())

        # Assert
        healthy.assert_called_once()

    async def test_factory_adds_webhook_listener(self):
        publisher = create_auth_event_publisher("http://hooks.test/auth")

        assert any(isinstance(listener, WebhookAuthEventListener) for listener in publisher.listeners)


@pytest.mark.asyncio
class TestQueueAuthEventListener:

    async def test_only_own_events_are_queued(self):
        listener = QueueAuthEventListener(user_id=3)

        await listener(make_event(user_id=4))
        await listener(make_event(user_id=3, event_type=AuthEventType.SIGNED_OUT))

        event = await asyncio.wait_for(listener.get(), timeout=1)
        assert event.event_type == AuthEventType.SIGNED_OUT
        assert listener.queue.empty()

    async def test_full_queue_drops_events(self):
        listener = QueueAuthEventListener(user_id=3, maxsize=1)

        await listener(make_event())
        await listener(make_event())

        assert listener.queue.qsize() == 1


@pytest.mark.asyncio
class TestWebhookAuthEventListener:

    async def test_posts_event_payload(self):
        listener = WebhookAuthEventListener("http://hooks.test/auth")
        response = MagicMock()
        response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient.post", new=AsyncMock(return_value=response)) as post:
            await listener(make_event())
            await listener.drain()

        payload = post.call_args.kwargs["json"]
        assert payload["event_type"] == "signed_in"
        assert payload["user_id"] == 3

    async def test_http_error_is_logged_not_raised(self):
        listener = WebhookAuthEventListener("http://hooks.test/auth")

        with patch("httpx.AsyncClient.post", new=AsyncMock(side_effect=httpx.ConnectError("refused"))):
            await listener(make_event())
            await listener.drain()

        assert not listener.pending

    async def test_slow_webhook_does_not_delay_publisher(self):
        """
        Given: A webhook that has not answered yet
        When: An event is published
        Then: publish returns at once and the POST completes in the background
        """
        # Arrange
        listener = WebhookAuthEventListener("http://hooks.test/auth")
        publisher = InMemoryAuthEventPublisher()
        publisher.subscribe(listener)
        answered = asyncio.Event()
        response = MagicMock()
        response.raise_for_status = MagicMock()

        async def slow_post(*args, **kwargs):
            await answered.wait()
            return response

        with patch("httpx.AsyncClient.post", new=AsyncMock(side_effect=slow_post)) as post:
            # Act
            await asyncio.wait_for(publisher.publish(make_event()), timeout=1)

            # Assert
            assert len(listener.pending) == 1

            answered.set()
            await asyncio.wait_for(publisher.close(), timeout=1)

        post.assert_called_once()
        assert not listener.pending
