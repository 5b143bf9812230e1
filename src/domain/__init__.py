from .base import BaseModel, generate_token, utc_now
from .user import User
from .auth_session import AuthSession, AuthEvent, AuthEventType, SessionContext
from .invoice import Invoice, InvoiceStatus, can_transition
from .invoice_item import InvoiceItem, join_item_text, split_item_text
from .line_item import LineItem
from .totals import InvoiceTotals, calculate_totals, format_currency
from .invoice_number import generate_invoice_number, INVOICE_NUMBER_PATTERN

__all__ = [
    "BaseModel",
    "generate_token",
    "utc_now",
    "User",
    "AuthSession",
    "AuthEvent",
    "AuthEventType",
    "SessionContext",
    "Invoice",
    "InvoiceStatus",
    "can_transition",
    "InvoiceItem",
    "join_item_text",
    "split_item_text",
    "LineItem",
    "InvoiceTotals",
    "calculate_totals",
    "format_currency",
    "generate_invoice_number",
    "INVOICE_NUMBER_PATTERN",
]
