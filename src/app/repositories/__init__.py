from .invoice_repository import InvoiceRepository
from .invoice_item_repository import InvoiceItemRepository
from .user_repository import UserRepository
from .auth_session_repository import AuthSessionRepository

__all__ = [
    "InvoiceRepository",
    "InvoiceItemRepository",
    "UserRepository",
    "AuthSessionRepository",
]
