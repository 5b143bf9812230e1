from .unit_of_work import UnitOfWork
from .password_hasher import PasswordHasher
from .auth_event_publisher import AuthEventPublisher, AuthEventListener
from .document_renderer import InvoiceDocumentRenderer

__all__ = [
    "UnitOfWork",
    "PasswordHasher",
    "AuthEventPublisher",
    "AuthEventListener",
    "InvoiceDocumentRenderer",
]
