"""Unit tests for LineItem and stored item text"""

import pytest
from decimal import Decimal
from pydantic import ValidationError

from src.domain.invoice_item import InvoiceItem, join_item_text, split_item_text
from src.domain.line_item import LineItem


class TestLineItem:

    def test_amount_is_quantity_times_unit_price(self):
        item = LineItem(name="Widget", quantity="2", unit_price="50")

        assert item.amount == Decimal("100")

    def test_blank_inputs_count_as_zero(self):
        item = LineItem(name="Widget", quantity="", unit_price=None)

        assert item.quantity == Decimal("0")
        assert item.unit_price == Decimal("0")
        assert item.amount == Decimal("0")

    def test_amount_follows_edits(self):
        """
        Given: An item with amount 100
        When: Quantity is changed to 3
        Then: amount becomes 150
        """
        # Arrange
        item = LineItem(name="Widget", quantity="2", unit_price="50")

        # Act
        item.quantity = Decimal("3")

        # Assert
        assert item.amount == Decimal("150")

    def test_amount_cannot_be_assigned(self):
        item = LineItem(name="Widget", quantity="2", unit_price="50")

        with pytest.raises(AttributeError):
            item.amount = Decimal("1")

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            LineItem(name="Widget", quantity="-1", unit_price="50")

    def test_negative_assignment_rejected(self):
        item = LineItem(name="Widget", quantity="1", unit_price="50")

        with pytest.raises(ValidationError):
            item.unit_price = Decimal("-5")

    def test_amount_is_serialized(self):
        item = LineItem(name="Widget", quantity="2", unit_price="50")

        assert item.model_dump()["amount"] == Decimal("100")

    def test_stored_description_joins_name_and_description(self):
        item = LineItem(name="Widget", description="Blue, size M")

        assert item.stored_description == "Widget\nBlue, size M"


class TestItemText:

    def test_split_on_first_newline(self):
        assert split_item_text("Widget\nBlue, size M") == ("Widget", "Blue, size M")

    def test_name_only(self):
        assert split_item_text("Widget") == ("Widget", "")

    def test_description_keeps_later_newlines(self):
        assert split_item_text("Widget\nline one\nline two") == ("Widget", "line one\nline two")

    def test_empty(self):
        assert split_item_text(None) == ("", "")
        assert split_item_text("") == ("", "")

    def test_join_without_description(self):
        assert join_item_text("Widget") == "Widget"
        assert join_item_text("Widget", "") == "Widget"

    def test_invoice_item_display_fields(self):
        item = InvoiceItem(
            invoice_id=1,
            description="Widget\nBlue, size M",
            quantity=Decimal("2"),
            unit_price=Decimal("50"),
            amount=Decimal("100"),
        )

        assert item.display_name == "Widget"
        assert item.display_description == "Blue, size M"
