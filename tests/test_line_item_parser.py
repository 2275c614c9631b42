"""Tests for LineItemParser component."""

import time
from decimal import Decimal
from expense_receipts.models import LineItem
from expense_receipts.parsers.line_item_parser import LineItemParser
from expense_receipts.parsers.base import ReceiptContext


class TestLineItemParser:
    """Test suite for LineItemParser."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = LineItemParser()

    def test_item_with_explicit_amount(self):
        """Test description, quantity, unit price and line amount."""
        result = self.parser.parse(ReceiptContext(full_text="Bread 2x1,50 3,00€"))

        assert result.value == [LineItem("Bread", Decimal("2"), Decimal("1.50"), Decimal("3.00"))]
        assert result.metadata['count'] == 1

    def test_amount_computed_when_missing(self):
        """Test that the amount is quantity times unit price when not printed."""
        result = self.parser.parse(ReceiptContext(full_text="Leche entera 3 x 0,99€"))

        item = result.value[0]
        assert item.description == "Leche entera"
        assert item.quantity == Decimal("3")
        assert item.unit_price == Decimal("0.99")
        assert item.amount == Decimal("2.97")

    def test_decimal_quantity(self):
        """Test fractional quantities such as weighed goods."""
        result = self.parser.parse(ReceiptContext(full_text="Manzanas 1,5x2,00 3,00"))

        item = result.value[0]
        assert item.quantity == Decimal("1.5")
        assert item.amount == Decimal("3.00")

    def test_items_keep_source_order(self):
        """Test that items are returned in the order printed, without merging."""
        text = """
        Coffee 1x1,20€
        Croissant 2x1,10 2,20€
        Coffee 1x1,20€
        """

        result = self.parser.parse(ReceiptContext(full_text=text))

        assert [item.description for item in result.value] == ["Coffee", "Croissant", "Coffee"]

    def test_placeholder_when_no_items(self):
        """Test that a single placeholder item is synthesized."""
        result = self.parser.parse(ReceiptContext(full_text="TOTAL 3,00€"))

        assert result.value == [LineItem("Receipt items", Decimal("1.0"), Decimal("0.0"), Decimal("0.0"))]
        assert result.is_default

    def test_multiplication_sign_not_recognized(self):
        """Test that only a literal 'x' separates quantity and price."""
        result = self.parser.parse(ReceiptContext(full_text="Agua 2×0,50 1,00€"))

        assert result.value == [LineItem.placeholder()]

    def test_placeholder_for_empty_input(self):
        """Test placeholder for empty text."""
        result = self.parser.parse(ReceiptContext(full_text=""))

        assert len(result.value) == 1
        assert result.value[0].description == "Receipt items"

    def test_description_may_contain_numbers(self):
        """Test that numbers not followed by 'x price' stay in the description."""
        result = self.parser.parse(ReceiptContext(full_text="Pack 6 latas 2x3,00 6,00€"))

        item = result.value[0]
        assert item.description == "Pack 6 latas"
        assert item.quantity == Decimal("2")
        assert item.amount == Decimal("6.00")

    def test_long_whitespace_line_is_fast(self):
        """Test that long noisy lines are scanned in linear time."""
        line = "a" + " " * 20000 + "1"
        start = time.perf_counter()

        result = self.parser.parse(ReceiptContext(full_text=line, lines=[line]))

        assert time.perf_counter() - start < 1.0
        assert result.is_default

    def test_long_line_with_item_at_end(self):
        """Test that an item after a long run of spaces is still found quickly."""
        line = "Cafe" + " " * 20000 + "2x1,50"
        start = time.perf_counter()

        result = self.parser.parse(ReceiptContext(full_text=line, lines=[line]))

        assert time.perf_counter() - start < 1.0
        assert result.value[0].description == "Cafe"
        assert result.value[0].amount == Decimal("3.00")

    def test_non_ascii_digits_ignored(self):
        """Test that fullwidth digits are not read as quantities or prices."""
        result = self.parser.parse(ReceiptContext(full_text="Pan ２x１,５０"))

        assert result.value == [LineItem.placeholder()]
