import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem


@pytest.fixture
def make_invoice():
    """Factory for stored Invoice entities"""
    def _make(**overrides):
        values = dict(
            id=1,
            user_id=7,
            invoice_number="INV-202405-042",
            client_name="Acme Corp",
            client_email="billing@acme.test",
            client_address="1 Main Street",
            issue_date=date(2024, 5, 1),
            due_date=date(2024, 5, 31),
            status=InvoiceStatus.DRAFT,
            tax_rate=Decimal("10"),
            subtotal=Decimal("125"),
            tax_amount=Decimal("12.5"),
            total=Decimal("137.5"),
            created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
            updated_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        )
        values.update(overrides)
        return Invoice(**values)
    return _make


@pytest.fixture
def sample_items():
    """Stored items of the default invoice"""
    return [
        InvoiceItem(
            id=1, invoice_id=1, description="Widget\nBlue, size M",
            quantity=Decimal("2"), unit_price=Decimal("50"), amount=Decimal("100"),
        ),
        InvoiceItem(
            id=2, invoice_id=1, description="Setup",
            quantity=Decimal("1"), unit_price=Decimal("25"), amount=Decimal("25"),
        ),
    ]
