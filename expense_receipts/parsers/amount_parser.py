"""Total amount extraction with keyword search and largest-amount fallback."""

import re
import logging
from decimal import Decimal
from typing import List, Tuple
from .base import BaseParser, ParseResult, ReceiptContext, PRIMARY, FALLBACK, to_decimal

logger = logging.getLogger(__name__)


class TotalAmountParser(BaseParser):
    """Specialized parser for extracting the receipt total."""

    def __init__(self, config=None):
        super().__init__(config)
        symbol = re.escape(self.config.currency_symbol)

        # Keyword, anything, then the first amount after it
        self.total_pattern = re.compile(
            self._keyword_alternation(self.config.total_keywords) + r'.*?(\d+[,.]\d{2})\s*' + symbol + '?',
            re.IGNORECASE | re.ASCII
        )
        # Amounts printed with the currency symbol
        self.amount_pattern = re.compile(r'(\d+[,.]\d{2})\s*' + symbol, re.ASCII)

    def parse(self, context: ReceiptContext) -> ParseResult:
        """
        Extract the total amount.

        Totals are printed near the bottom, so the last lines are searched
        bottom-up for a total keyword. Without one, the largest amount on the
        whole receipt is taken.

        Args:
            context: Receipt context with normalized lines

        Returns:
            ParseResult with a non-negative Decimal
        """
        result = self._find_keyword_amount(context)
        if result is None:
            result = self._find_largest_amount(context)
        if result is None:
            return self._default(Decimal("0.0"))

        self._log_result(result)
        return result

    def _find_keyword_amount(self, context: ReceiptContext):
        """Bottom-most total keyword followed by an amount."""
        window = list(reversed(context.lines))[:self.config.total_window]
        for offset, line in enumerate(window):
            match = self.total_pattern.search(line)
            if match:
                return ParseResult(
                    value=to_decimal(match.group(1), Decimal("0.0")),
                    confidence=0.9,
                    source_text=line,
                    metadata={'type': PRIMARY, 'line_idx': len(context.lines) - 1 - offset}
                )
        return None

    def _find_largest_amount(self, context: ReceiptContext):
        """Largest currency amount anywhere on the receipt."""
        candidates = self._extract_amounts(context)
        if not candidates:
            self.logger.debug("No currency amounts on receipt")
            return None

        amount, line = max(candidates, key=lambda x: x[0])
        self.logger.info(f"No total keyword, using largest amount of {len(candidates)}: {amount}")
        return ParseResult(
            value=amount,
            confidence=0.5,
            source_text=line,
            metadata={'type': FALLBACK, 'candidates': len(candidates)}
        )

    def _extract_amounts(self, context: ReceiptContext) -> List[Tuple[Decimal, str]]:
        amounts = []
        for line in context.lines:
            for match in self.amount_pattern.finditer(line):
                amount = to_decimal(match.group(1))
                if amount is not None:
                    amounts.append((amount, line))
        return amounts
