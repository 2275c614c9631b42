"""Receipt parsing: OCR text in, ReceiptRecord out."""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from .config import ParserConfig
from .models import ReceiptRecord
from .parsers import (
    MerchantParser, AddressParser, DateParser, TotalAmountParser, TaxParser, LineItemParser,
)
from .parsers.base import ReceiptContext

logger = logging.getLogger(__name__)


class ReceiptParser:
    """
    Receipt parser built from independent field parsers.

    Every field parser works on the same normalized line list and resolves a
    miss to its own default, so parsing never fails for any text. An instance
    holds only compiled patterns and may be shared between threads.
    """

    def __init__(self,
                 config: Optional[ParserConfig] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize the field parsers.

        Args:
            config: Parser settings, defaults reproduce the stock heuristics
            clock: Time source for the date fallback, defaults to datetime.now
        """
        self.config = config or ParserConfig()
        self.merchant_parser = MerchantParser(self.config)
        self.address_parser = AddressParser(self.config)
        self.date_parser = DateParser(self.config, clock=clock)
        self.total_parser = TotalAmountParser(self.config)
        self.line_item_parser = LineItemParser(self.config)
        self.tax_parser = TaxParser(self.config)

    def parse(self, text: str) -> ReceiptRecord:
        """Parse OCR text into a ReceiptRecord."""
        return self.parse_receipt(text)['record']

    def parse_receipt(self, text: str) -> Dict[str, Any]:
        """
        Parse a receipt and report how each field was found.

        Args:
            text: Raw OCR text from receipt

        Returns:
            Dictionary with the record, per-field confidence scores, the
            names of fields that fell back to their defaults, and per-field
            metadata
        """
        context = ReceiptContext(full_text=text or "")
        if not context.lines:
            logger.warning("Empty receipt text, every field will use its default")

        results = {
            'merchant_name': self.merchant_parser.parse(context),
            'address': self.address_parser.parse(context),
            'date': self.date_parser.parse(context),
            'total_amount': self.total_parser.parse(context),
            'items': self.line_item_parser.parse(context),
            'tax_amount': self.tax_parser.parse(context),
        }

        record = ReceiptRecord(
            merchant_name=results['merchant_name'].value,
            address=results['address'].value,
            date=results['date'].value,
            total_amount=results['total_amount'].value,
            items=results['items'].value,
            tax_amount=results['tax_amount'].value,
            currency=self.config.currency,
        )

        logger.info(f"Parsed receipt: merchant={record.merchant_name}, date={record.date}, "
                    f"total={record.total_amount} {record.currency}, items={len(record.items)}")

        return {
            'record': record,
            'confidence_scores': {name: result.confidence for name, result in results.items()},
            'defaulted_fields': [name for name, result in results.items() if result.is_default],
            'metadata': {name: result.metadata for name, result in results.items()},
        }


def parse_receipt(text: str,
                  config: Optional[ParserConfig] = None,
                  clock: Optional[Callable[[], datetime]] = None) -> ReceiptRecord:
    """Parse OCR text with a one-off ReceiptParser."""
    return ReceiptParser(config=config, clock=clock).parse(text)
