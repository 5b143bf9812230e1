from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_item_repository import SqlAlchemyInvoiceItemRepository
from .user_repository import SqlAlchemyUserRepository
from .auth_session_repository import SqlAlchemyAuthSessionRepository

__all__ = [
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceItemRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyAuthSessionRepository",
]
