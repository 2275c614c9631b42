"""Tax (IVA/VAT) amount extraction."""

import re
import logging
from decimal import Decimal
from .base import BaseParser, ParseResult, ReceiptContext, PRIMARY, to_decimal

logger = logging.getLogger(__name__)


class TaxParser(BaseParser):
    """Finds the tax line in the receipt footer."""

    def __init__(self, config=None):
        super().__init__(config)
        self.tax_pattern = re.compile(
            self._keyword_alternation(self.config.tax_keywords)
            + r'.*?(\d+[,.]\d{2})\s*' + re.escape(self.config.currency_symbol) + '?',
            re.IGNORECASE | re.ASCII
        )

    def parse(self, context: ReceiptContext) -> ParseResult:
        """Return the bottom-most tax amount, or zero."""
        window = list(reversed(context.lines))[:self.config.tax_window]
        for offset, line in enumerate(window):
            match = self.tax_pattern.search(line)
            if match:
                result = ParseResult(
                    value=to_decimal(match.group(1), Decimal("0.0")),
                    confidence=0.9,
                    source_text=line,
                    metadata={'type': PRIMARY, 'line_idx': len(context.lines) - 1 - offset}
                )
                self._log_result(result)
                return result

        return self._default(Decimal("0.0"))
