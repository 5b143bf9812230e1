"""Data Transfer Objects for Invoice Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator

from src.domain.invoice import Invoice
from src.domain.invoice_item import InvoiceItem
from src.domain.line_item import MAX_DECIMAL_PLACES, LineItem


def _status_value(status: Any) -> str:
    return status.value if hasattr(status, "value") else status


def _blank_rate_as_zero(v: Any) -> Any:
    if v is None or (isinstance(v, str) and not v.strip()):
        return Decimal("0")
    return v


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice

    Used as input to CreateInvoice use case. Required-field checks happen in
    the use case so that a missing value is reported as VALIDATION_ERROR.
    """

    user_id: int = Field(
        ...,
        description="Owning user"
    )

    client_name: str = Field(
        default="",
        description="Client name (required)"
    )

    client_email: str = Field(
        default="",
        description="Client email (required)"
    )

    client_address: str = Field(
        default="",
        description="Client address (required)"
    )

    issue_date: Optional[date] = Field(
        default=None,
        description="Issue date (defaults to today)"
    )

    due_date: Optional[date] = Field(
        default=None,
        description="Due date (required)"
    )

    tax_rate: Decimal = Field(
        default=Decimal("0"),
        decimal_places=MAX_DECIMAL_PLACES,
        description="Tax rate percentage (0-100)"
    )

    notes: Optional[str] = Field(
        default=None,
        description="Notes / payment terms"
    )

    items: List[LineItem] = Field(
        default_factory=list,
        description="Line items"
    )

    @field_validator("tax_rate", mode="before")
    @classmethod
    def blank_tax_rate(cls, v):
        return _blank_rate_as_zero(v)


class InvoiceItemDTO(BaseModel):
    """Persisted line item with its stored text split for display"""

    id: int = Field(..., description="Item ID")
    name: str = Field(..., description="Item name")
    description: str = Field(default="", description="Item description")
    quantity: Decimal = Field(..., description="Quantity")
    unit_price: Decimal = Field(..., description="Price per unit")
    amount: Decimal = Field(..., description="quantity * unit_price")

    @classmethod
    def from_entity(cls, item: InvoiceItem) -> "InvoiceItemDTO":
        return cls(
            id=item.id,
            name=item.display_name,
            description=item.display_description,
            quantity=item.quantity,
            unit_price=item.unit_price,
            amount=item.amount,
        )


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for a single invoice

    Returned by ListInvoices (per row) and UpdateInvoiceStatus.
    """

    invoice_id: int = Field(..., description="Invoice ID")
    invoice_number: str = Field(..., description="Invoice number")
    client_name: str = Field(..., description="Client name")
    client_email: str = Field(..., description="Client email")
    client_address: str = Field(..., description="Client address")
    issue_date: date = Field(..., description="Issue date")
    due_date: date = Field(..., description="Due date")
    status: str = Field(..., description="Invoice status (draft, sent, paid, overdue)")
    tax_rate: Decimal = Field(..., description="Tax rate percentage")
    subtotal: Decimal = Field(..., description="Sum of item amounts")
    tax_amount: Decimal = Field(..., description="Tax amount")
    total: Decimal = Field(..., description="Amount due")
    notes: Optional[str] = Field(default=None, description="Notes / payment terms")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @classmethod
    def from_entity(cls, invoice: Invoice, **extra) -> "InvoiceResponseDTO":
        return cls(
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            client_name=invoice.client_name,
            client_email=invoice.client_email,
            client_address=invoice.client_address,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            status=_status_value(invoice.status),
            tax_rate=invoice.tax_rate,
            subtotal=invoice.subtotal,
            tax_amount=invoice.tax_amount,
            total=invoice.total,
            notes=invoice.notes,
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
            **extra,
        )

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": 1,
                "invoice_number": "INV-202405-042",
                "client_name": "Acme Corp",
                "client_email": "billing@acme.test",
                "client_address": "1 Main Street",
                "issue_date": "2024-05-01",
                "due_date": "2024-05-31",
                "status": "draft",
                "tax_rate": "10",
                "subtotal": "125",
                "tax_amount": "12.5",
                "total": "137.5",
                "notes": None,
                "created_at": "2024-05-01T00:00:00Z",
                "updated_at": "2024-05-01T00:00:00Z"
            }
        }


class InvoiceDetailResponseDTO(InvoiceResponseDTO):
    """
    Response DTO for an invoice with its line items

    Returned by CreateInvoice and GetInvoice.
    """

    items: List[InvoiceItemDTO] = Field(
        default_factory=list,
        description="Line items in insertion order"
    )

    @classmethod
    def from_entities(
        cls, invoice: Invoice, items: List[InvoiceItem]
    ) -> "InvoiceDetailResponseDTO":
        return cls.from_entity(
            invoice, items=[InvoiceItemDTO.from_entity(item) for item in items]
        )


class ListInvoicesResponseDTO(BaseModel):
    """Paginated invoice listing, newest first"""

    invoices: List[InvoiceResponseDTO] = Field(..., description="Invoices on this page")
    total: int = Field(..., description="Total invoices matching the filter")
    limit: int = Field(..., description="Page size")
    offset: int = Field(..., description="Page offset")


class UpdateInvoiceStatusCommandDTO(BaseModel):
    """Command DTO for changing an invoice's status"""

    user_id: int = Field(..., description="Owning user")
    invoice_id: int = Field(..., description="Invoice ID")
    status: str = Field(..., description="Target status")


class DeleteInvoiceResponseDTO(BaseModel):
    invoice_id: int = Field(..., description="Deleted invoice ID")
    deleted: bool = Field(default=True)


class CalculateTotalsCommandDTO(BaseModel):
    """
    Command DTO for the live totals preview

    Blank numeric inputs count as zero.
    """

    items: List[LineItem] = Field(default_factory=list, description="Line items being edited")
    tax_rate: Decimal = Field(
        default=Decimal("0"), ge=0, le=100, decimal_places=MAX_DECIMAL_PLACES,
        description="Tax rate percentage"
    )

    @field_validator("tax_rate", mode="before")
    @classmethod
    def blank_tax_rate(cls, v):
        return _blank_rate_as_zero(v)


class TotalsResponseDTO(BaseModel):
    """Computed amounts with their two-decimal display strings"""

    item_amounts: List[Decimal] = Field(..., description="Amount of each line item, in order")
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    subtotal_display: str
    tax_amount_display: str
    total_display: str


class InvoiceDraftDTO(BaseModel):
    """Default values of a fresh invoice form"""

    client_name: str = ""
    client_email: str = ""
    client_address: str = ""
    issue_date: date
    due_date: Optional[date] = None
    status: str = "draft"
    tax_rate: Decimal = Decimal("0")
    notes: str = ""
    items: List[LineItem] = Field(default_factory=lambda: [LineItem()])


class RenderedInvoiceDTO(BaseModel):
    invoice_id: int
    invoice_number: str
    html: str
