import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def mock_event_publisher():
    """Mock auth event publisher"""
    publisher = MagicMock()
    publisher.publish = AsyncMock()
    return publisher
