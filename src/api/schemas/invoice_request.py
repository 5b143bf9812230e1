"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests. Shape and type
errors are rejected here (422); missing required values pass through and
are reported by the use case as VALIDATION_ERROR.
"""

from datetime import date
from decimal import Decimal
from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator

from src.domain.line_item import MAX_DECIMAL_PLACES, MAX_DIGITS


def _blank_as_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _blank_as_zero(v: Any) -> Any:
    if v is None or (isinstance(v, str) and not v.strip()):
        return Decimal("0")
    return v


class LineItemRequestSchema(BaseModel):
    """One row of the invoice form"""

    name: str = Field(default="", description="Item name")
    description: str = Field(default="", description="Optional description")
    quantity: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=MAX_DIGITS, decimal_places=MAX_DECIMAL_PLACES,
        description="Quantity (blank = 0)"
    )
    unit_price: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=MAX_DIGITS, decimal_places=MAX_DECIMAL_PLACES,
        description="Unit price (blank = 0)"
    )

    @field_validator("quantity", "unit_price", mode="before")
    @classmethod
    def blank_numbers(cls, v):
        return _blank_as_zero(v)


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating an invoice

    Used for POST /invoices endpoint.
    """

    client_name: str = Field(default="", description="Client name (required)")
    client_email: str = Field(default="", description="Client email (required)")
    client_address: str = Field(default="", description="Client address (required)")
    issue_date: Optional[date] = Field(default=None, description="Issue date (defaults to today)")
    due_date: Optional[date] = Field(default=None, description="Due date (required)")
    tax_rate: Decimal = Field(
        default=Decimal("0"), decimal_places=MAX_DECIMAL_PLACES,
        description="Tax rate percentage (0-100, up to 6 decimal places)"
    )
    notes: Optional[str] = Field(default=None, description="Notes / payment terms")
    items: List[LineItemRequestSchema] = Field(default_factory=list, description="Line items")

    @field_validator("issue_date", "due_date", mode="before")
    @classmethod
    def blank_dates(cls, v):
        return _blank_as_none(v)

    @field_validator("tax_rate", mode="before")
    @classmethod
    def blank_tax_rate(cls, v):
        return _blank_as_zero(v)

    class Config:
        json_schema_extra = {
            "example": {
                "client_name": "Acme Corp",
                "client_email": "billing@acme.test",
                "client_address": "1 Main Street\nSpringfield",
                "issue_date": "2024-05-01",
                "due_date": "2024-05-31",
                "tax_rate": "10",
                "notes": "Net 30",
                "items": [
                    {"name": "Widget", "description": "Blue, size M", "quantity": "2", "unit_price": "50.00"},
                    {"name": "Setup", "quantity": "1", "unit_price": "25.00"}
                ]
            }
        }


class CalculateTotalsRequestSchema(BaseModel):
    """Request schema for POST /invoices/totals"""

    items: List[LineItemRequestSchema] = Field(default_factory=list)
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100, decimal_places=MAX_DECIMAL_PLACES)

    @field_validator("tax_rate", mode="before")
    @classmethod
    def blank_tax_rate(cls, v):
        return _blank_as_zero(v)


class UpdateInvoiceStatusRequestSchema(BaseModel):
    """Request schema for PATCH /invoices/{invoice_id}/status"""

    status: str = Field(..., min_length=1, description="draft, sent, paid or overdue")

    class Config:
        json_schema_extra = {"example": {"status": "paid"}}
