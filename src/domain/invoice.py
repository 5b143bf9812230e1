"""Invoice Domain Entity

Tracks client invoices, their stored totals and payment status.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, String, Date, Text
from src.domain.base import AmountType, BaseModel, IdType, RateType, utc_now


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


# Status changes are driven by events outside the system (payment received,
# invoice mailed by hand), so every status may follow every other one.
ALLOWED_TRANSITIONS: dict[InvoiceStatus, frozenset[InvoiceStatus]] = {
    status: frozenset(InvoiceStatus) for status in InvoiceStatus
}


def can_transition(
    current: Union[InvoiceStatus, str], target: Union[InvoiceStatus, str]
) -> bool:
    """Return True if an invoice in `current` status may move to `target`"""
    try:
        current = InvoiceStatus(current)
        target = InvoiceStatus(target)
    except ValueError:
        return False
    return target in ALLOWED_TRANSITIONS[current]


class Invoice(BaseModel, table=True):
    """
    Invoice - Billing document issued to a client

    Domain Rules:
    - subtotal is the sum of the line item amounts at creation time
    - tax_amount = subtotal * tax_rate / 100
    - total = subtotal + tax_amount
    - Totals are stored once and never re-derived from the items
    - Status defaults to draft and may change freely afterwards
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_user_id', 'user_id'),
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_invoice_number', 'invoice_number'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    user_id: int = Field(
        sa_column=Column(IdType, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        description="Owning user account"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Invoice number (e.g., INV-202405-042), not guaranteed unique"
    )

    client_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Client name"
    )

    client_email: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Client email address"
    )

    client_address: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Client postal address"
    )

    issue_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Issue date"
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Payment due date"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (draft, sent, paid, overdue)"
    )

    tax_rate: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(RateType, nullable=False),
        description="Tax rate percentage (0-100)"
    )

    subtotal: Decimal = Field(
        sa_column=Column(AmountType, nullable=False),
        description="Sum of line item amounts"
    )

    tax_amount: Decimal = Field(
        sa_column=Column(AmountType, nullable=False),
        description="subtotal * tax_rate / 100"
    )

    total: Decimal = Field(
        sa_column=Column(AmountType, nullable=False),
        description="subtotal + tax_amount"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free text notes / payment terms"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "user_id": 7,
                "invoice_number": "INV-202405-042",
                "client_name": "Acme Corp",
                "client_email": "billing@acme.test",
                "client_address": "1 Main Street\nSpringfield",
                "issue_date": "2024-05-01",
                "due_date": "2024-05-31",
                "status": "draft",
                "tax_rate": "10",
                "subtotal": "125",
                "tax_amount": "12.5",
                "total": "137.5",
                "notes": "Net 30",
                "created_at": "2024-05-01T00:00:00Z",
                "updated_at": "2024-05-01T00:00:00Z"
            }
        }
