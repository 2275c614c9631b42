"""Line item extraction for "description qty x price [amount]" lines."""

import re
import logging
from decimal import Decimal
from .base import BaseParser, ParseResult, ReceiptContext, PRIMARY, to_decimal
from ..models import LineItem

logger = logging.getLogger(__name__)


class LineItemParser(BaseParser):
    """Extracts every itemized purchase, in the order printed."""

    def __init__(self, config=None):
        super().__init__(config)
        symbol = re.escape(self.config.currency_symbol)

        # Quantity x unit price [amount], preceded by whitespace. The description
        # is everything before it, so no pattern has to scan it.
        # Only a literal 'x' separates quantity and unit price; '×' is not recognized
        self.item_pattern = re.compile(
            r'(?<=\s)(\d+(?:[,.]\d*)?)\s*x\s*(\d+[,.]\d{2})\s*' + symbol
            + r'?\s*(\d+[,.]\d{2})?\s*' + symbol + '?',
            re.IGNORECASE | re.ASCII
        )

    def parse(self, context: ReceiptContext) -> ParseResult:
        """
        Extract line items.

        Returns:
            ParseResult whose value is a non-empty list of LineItem. When no
            line matches, the list holds a single placeholder item.
        """
        items = []
        for line in context.lines:
            item = self._parse_line(line)
            if item is not None:
                items.append(item)

        if not items:
            return self._default([LineItem.placeholder(self.config.placeholder_description)])

        result = ParseResult(
            value=items,
            confidence=0.8,
            metadata={'type': PRIMARY, 'count': len(items)}
        )
        self._log_result(result)
        return result

    def _parse_line(self, line: str):
        # First quantity x price with a non-empty description before it
        match = next((m for m in self.item_pattern.finditer(line) if line[:m.start()].strip()), None)
        if match is None:
            return None

        description = line[:match.start()].strip()
        quantity_token, price_token, amount_token = match.groups()
        quantity = to_decimal(quantity_token, Decimal("1.0"))
        unit_price = to_decimal(price_token, Decimal("0.0"))
        amount = to_decimal(amount_token)
        if amount is None:
            amount = quantity * unit_price

        self.logger.debug(f"Item line: {line}")
        return LineItem(
            description=description,
            quantity=quantity,
            unit_price=unit_price,
            amount=amount,
        )
