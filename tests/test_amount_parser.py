"""Tests for TotalAmountParser component."""

import pytest
from decimal import Decimal
from expense_receipts.parsers.amount_parser import TotalAmountParser
from expense_receipts.parsers.base import ReceiptContext


class TestTotalAmountParser:
    """Test suite for TotalAmountParser."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = TotalAmountParser()

    def test_total_keyword(self):
        """Test parsing an amount after the TOTAL keyword."""
        context = ReceiptContext(full_text="Pan 1,50€\nTOTAL: 3,00€")

        result = self.parser.parse(context)

        assert result.value == Decimal("3.00")
        assert result.metadata['type'] == 'primary'
        assert result.metadata['line_idx'] == 1

    @pytest.mark.parametrize("line, expected", [
        ("SUMA 12,40 €", Decimal("12.40")),
        ("Amount due 7.25", Decimal("7.25")),
        ("total a pagar ..... 18,95€", Decimal("18.95")),
    ])
    def test_total_keywords(self, line, expected):
        """Test each total keyword, with or without the currency symbol."""
        result = self.parser.parse(ReceiptContext(full_text=line))

        assert result.value == expected

    def test_bottom_most_total_wins(self):
        """Test that the total closest to the bottom is preferred."""
        text = """
        Subtotal 10,00€
        IVA 21% 2,10€
        TOTAL 12,10€
        """

        result = self.parser.parse(ReceiptContext(full_text=text))

        assert result.value == Decimal("12.10")

    def test_comma_and_dot_are_equivalent(self):
        """Test decimal separator normalization."""
        comma = self.parser.parse(ReceiptContext(full_text="TOTAL 12,50 €"))
        dot = self.parser.parse(ReceiptContext(full_text="TOTAL 12.50 €"))

        assert comma.value == dot.value == Decimal("12.50")

    def test_largest_amount_fallback(self):
        """Test that without a total keyword the largest amount is used."""
        text = "CAFE LA PLAZA\nCafe con leche 4,50€\nMenu del dia 9,99€\nGracias"

        result = self.parser.parse(ReceiptContext(full_text=text))

        assert result.value == Decimal("9.99")
        assert result.metadata['type'] == 'fallback'
        assert result.metadata['candidates'] == 2

    def test_fallback_needs_currency_symbol(self):
        """Test that bare numbers are not fallback candidates."""
        text = "CAFE\nCafe 4,50\nTarta 9,99"

        result = self.parser.parse(ReceiptContext(full_text=text))

        assert result.value == Decimal("0.0")
        assert result.is_default

    def test_keyword_outside_window_uses_fallback(self):
        """Test that only the last 15 lines are searched for a total keyword."""
        lines = ["TOTAL 50,00€"] + [f"linea {i}" for i in range(15)]

        result = self.parser.parse(ReceiptContext(full_text="\n".join(lines)))

        assert result.metadata['type'] == 'fallback'
        assert result.value == Decimal("50.00")

    def test_no_amount_found(self):
        """Test handling when no amount is present at all."""
        result = self.parser.parse(ReceiptContext(full_text="Gracias por su visita"))

        assert result.value == Decimal("0.0")
        assert result.is_default

    def test_empty_input(self):
        """Test that empty text gives a zero total."""
        result = self.parser.parse(ReceiptContext(full_text=""))

        assert result.value == Decimal("0.0")

    def test_never_negative(self):
        """Test that minus signs are not captured."""
        result = self.parser.parse(ReceiptContext(full_text="Total -5,00€"))

        assert result.value == Decimal("5.00")

    def test_fullwidth_digits_ignored(self):
        """Test that only ASCII digits form amounts."""
        result = self.parser.parse(ReceiptContext(full_text="TOTAL ３,００€\nPan ４,５０€"))

        assert result.value == Decimal("0.0")
        assert result.is_default
