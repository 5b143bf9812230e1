from .unit_of_work import SqlAlchemyUnitOfWork
from .password_hasher import Pbkdf2PasswordHasher
from .auth_event_publisher import (
    InMemoryAuthEventPublisher,
    LoggingAuthEventListener,
    WebhookAuthEventListener,
    QueueAuthEventListener,
    create_auth_event_publisher,
)
from .document_renderer import Jinja2InvoiceDocumentRenderer

__all__ = [
    "SqlAlchemyUnitOfWork",
    "Pbkdf2PasswordHasher",
    "InMemoryAuthEventPublisher",
    "LoggingAuthEventListener",
    "WebhookAuthEventListener",
    "QueueAuthEventListener",
    "create_auth_event_publisher",
    "Jinja2InvoiceDocumentRenderer",
]
