"""Merchant/business name extraction from receipt headers."""

import re
import logging
from .base import BaseParser, ParseResult, ReceiptContext, PRIMARY, FALLBACK

logger = logging.getLogger(__name__)


class MerchantParser(BaseParser):
    """Picks the business name from the top of the receipt."""

    def __init__(self, config=None):
        super().__init__(config)

        # Phone numbers, tax IDs and similar identifiers
        self.identifier_pattern = re.compile(r'\d{5,}', re.ASCII)

    def parse(self, context: ReceiptContext) -> ParseResult:
        """
        Extract the merchant name.

        The name is the first header line that is long enough to not be OCR
        noise and carries no long digit run. Falls back to the first line of
        the document, then to the configured default for empty input.
        """
        window = context.lines[:self.config.merchant_window]

        for line_idx, line in enumerate(window):
            if len(line) < self.config.merchant_min_length:
                continue
            if self.identifier_pattern.search(line):
                self.logger.debug(f"Skipping identifier line: {line}")
                continue

            result = ParseResult(
                value=line,
                confidence=max(0.5, 0.9 - line_idx * 0.1),
                source_text=line,
                metadata={'type': PRIMARY, 'line_idx': line_idx}
            )
            self._log_result(result)
            return result

        if context.lines:
            first_line = context.lines[0]
            result = ParseResult(
                value=first_line,
                confidence=0.3,
                source_text=first_line,
                metadata={'type': FALLBACK, 'line_idx': 0}
            )
            self._log_result(result)
            return result

        return self._default(self.config.merchant_default)
