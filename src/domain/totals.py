"""Invoice totals calculation

Pure functions deriving subtotal, tax amount and total from line items.
Values keep full Decimal precision; rounding happens only in format_currency.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Iterable, Union
from pydantic import BaseModel
from src.domain.line_item import ARITHMETIC_PRECISION, LineItem

Number = Union[Decimal, int, str]

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


class InvoiceTotals(BaseModel):
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal


def calculate_subtotal(items: Iterable[LineItem]) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = ARITHMETIC_PRECISION
        return sum((item.amount for item in items), Decimal("0"))


def _tax_on(subtotal: Decimal, tax_rate: Number) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = ARITHMETIC_PRECISION
        return subtotal * Decimal(tax_rate) / HUNDRED


def calculate_tax_amount(items: Iterable[LineItem], tax_rate: Number) -> Decimal:
    return _tax_on(calculate_subtotal(items), tax_rate)


def calculate_total(items: Iterable[LineItem], tax_rate: Number) -> Decimal:
    return calculate_totals(items, tax_rate).total


def calculate_totals(items: Iterable[LineItem], tax_rate: Number) -> InvoiceTotals:
    subtotal = calculate_subtotal(items)
    tax_amount = _tax_on(subtotal, tax_rate)
    with localcontext() as ctx:
        ctx.prec = ARITHMETIC_PRECISION
        total = subtotal + tax_amount
    return InvoiceTotals(subtotal=subtotal, tax_amount=tax_amount, total=total)


def format_currency(value: Number, symbol: str = "$") -> str:
    """Two-decimal display string, e.g. 1234.5 -> $1,234.50"""
    amount = Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
