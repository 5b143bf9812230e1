"""Invoice Item Domain Entity

Tracks the persisted line items of an invoice.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Text
from src.domain.base import AmountType, BaseModel, IdType, QuantityType, utc_now

ITEM_TEXT_SEPARATOR = "\n"


def join_item_text(name: Optional[str], description: Optional[str] = None) -> str:
    """Encode a line item's name and description into one stored field"""
    name = name or ""
    if description:
        return f"{name}{ITEM_TEXT_SEPARATOR}{description}"
    return name


def split_item_text(text: Optional[str]) -> tuple[str, str]:
    """Split stored item text on the first newline into (name, description)"""
    name, _, description = (text or "").partition(ITEM_TEXT_SEPARATOR)
    return name, description


class InvoiceItem(BaseModel, table=True):
    """
    Invoice Item - Billable row owned by an invoice

    Domain Rules:
    - Each item belongs to exactly one invoice
    - amount = quantity * unit_price
    - Created together with the invoice, deleted with it, never edited
    - description holds "name" or "name\\ndescription"
    """

    __tablename__ = "invoice_items"
    __table_args__ = (
        Index('ix_invoice_items_invoice_id', 'invoice_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique invoice item identifier (auto-increment)"
    )

    invoice_id: int = Field(
        sa_column=Column(IdType, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    description: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Item name, optionally followed by a newline and a description"
    )

    quantity: Decimal = Field(
        sa_column=Column(QuantityType, nullable=False),
        description="Quantity"
    )

    unit_price: Decimal = Field(
        sa_column=Column(QuantityType, nullable=False),
        description="Price per unit"
    )

    amount: Decimal = Field(
        sa_column=Column(AmountType, nullable=False),
        description="quantity * unit_price"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        description="Item creation timestamp"
    )

    @property
    def display_name(self) -> str:
        return split_item_text(self.description)[0]

    @property
    def display_description(self) -> str:
        return split_item_text(self.description)[1]

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "invoice_id": 1,
                "description": "Widget\nBlue, size M",
                "quantity": "2",
                "unit_price": "50",
                "amount": "100",
                "created_at": "2024-05-01T00:00:00Z"
            }
        }
