"""Tests for ParserConfig loading."""

import pytest
from pathlib import Path
from decimal import Decimal
from expense_receipts import ParserConfig, ReceiptParser


class TestParserConfig:
    """Test suite for ParserConfig."""

    def test_defaults(self):
        """Test that defaults carry the stock vocabularies and windows."""
        config = ParserConfig()

        assert config.currency == "EUR"
        assert config.total_window == 15
        assert config.tax_window == 10
        assert "calle" in config.address_keywords

    def test_from_yaml(self, tmp_path):
        """Test loading overrides from a YAML file."""
        path = tmp_path / "parser.yml"
        path.write_text("currency: USD\ncurrency_symbol: $\ntotal_keywords:\n  - total\n  - importe\n",
                        encoding='utf-8')

        config = ParserConfig.from_yaml(path)

        assert config.currency == "USD"
        assert config.total_keywords == ("total", "importe")
        assert config.tax_window == 10

    def test_empty_yaml_gives_defaults(self, tmp_path):
        """Test that an empty file keeps every default."""
        path = tmp_path / "parser.yml"
        path.write_text("", encoding='utf-8')

        assert ParserConfig.from_yaml(path) == ParserConfig()

    def test_unknown_key_rejected(self, tmp_path):
        """Test that typos in config keys are reported."""
        path = tmp_path / "parser.yml"
        path.write_text("totl_window: 3\n", encoding='utf-8')

        with pytest.raises(ValueError, match="totl_window"):
            ParserConfig.from_yaml(path)

    def test_non_mapping_rejected(self, tmp_path):
        """Test that a YAML list is not accepted as config."""
        path = tmp_path / "parser.yml"
        path.write_text("- a\n- b\n", encoding='utf-8')

        with pytest.raises(ValueError):
            ParserConfig.from_yaml(path)

    def test_config_drives_parser(self):
        """Test that custom keywords and currency reach the record."""
        config = ParserConfig.from_dict({
            'currency': 'USD',
            'currency_symbol': '$',
            'total_keywords': ['importe'],
        })
        parser = ReceiptParser(config=config)

        record = parser.parse("GROCERY STORE\nImporte 8.40$\nTOTAL 1.00$")

        assert record.currency == "USD"
        assert record.total_amount == Decimal("8.40")

    def test_shipped_rules_match_defaults(self):
        """Test that the example settings file documents the real defaults."""
        path = Path(__file__).parent.parent / "rules" / "parser.yml"

        assert ParserConfig.from_yaml(path) == ParserConfig()
