"""Line Item

Transient billable row held while an invoice is being composed.
"""

from decimal import Decimal, localcontext
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from src.domain.invoice_item import join_item_text

ZERO = Decimal("0")

# Input limits; stored columns are sized for these
MAX_DIGITS = 15
MAX_DECIMAL_PLACES = 6

# Significant digits for invoice arithmetic, enough to keep every result exact
ARITHMETIC_PRECISION = 60


class LineItem(BaseModel):
    """
    Line Item - One row of the invoice form

    Domain Rules:
    - quantity and unit_price are non-negative
    - A blank quantity or unit_price counts as 0
    - quantity and unit_price have at most 6 decimal places
    - amount is always quantity * unit_price and cannot be assigned
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(default="", description="Short item name")
    description: str = Field(default="", description="Optional long description")
    quantity: Decimal = Field(
        default=ZERO, ge=0, max_digits=MAX_DIGITS, decimal_places=MAX_DECIMAL_PLACES,
        description="Quantity (>= 0)"
    )
    unit_price: Decimal = Field(
        default=ZERO, ge=0, max_digits=MAX_DIGITS, decimal_places=MAX_DECIMAL_PLACES,
        description="Price per unit (>= 0)"
    )

    @field_validator("quantity", "unit_price", mode="before")
    @classmethod
    def blank_as_zero(cls, v: Any) -> Any:
        """Treat an empty form input as zero"""
        if v is None or (isinstance(v, str) and not v.strip()):
            return ZERO
        return v

    @computed_field
    @property
    def amount(self) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = ARITHMETIC_PRECISION
            return self.quantity * self.unit_price

    @property
    def stored_description(self) -> str:
        """Text persisted on the matching InvoiceItem"""
        return join_item_text(self.name, self.description)
