"""Street address extraction."""

import re
import logging
from .base import BaseParser, ParseResult, ReceiptContext, PRIMARY

logger = logging.getLogger(__name__)


class AddressParser(BaseParser):
    """Finds the line holding the shop's street address or postal code."""

    def __init__(self, config=None):
        super().__init__(config)

        # Street-type keyword anywhere in the line, or a postal code
        self.address_patterns = [
            (re.compile('.*' + self._keyword_alternation(self.config.address_keywords) + '.*',
                        re.IGNORECASE | re.ASCII), 'street_keyword'),
            (re.compile(r'.*\d{5}.*', re.ASCII), 'postal_code'),
        ]

    def parse(self, context: ReceiptContext) -> ParseResult:
        """Return the first address-like line near the top, or an empty string."""
        for line_idx, line in enumerate(context.lines[:self.config.address_window]):
            for pattern, pattern_type in self.address_patterns:
                if pattern.fullmatch(line):
                    result = ParseResult(
                        value=line,
                        confidence=0.8 if pattern_type == 'street_keyword' else 0.6,
                        source_text=line,
                        metadata={'type': PRIMARY, 'pattern_type': pattern_type, 'line_idx': line_idx}
                    )
                    self._log_result(result)
                    return result

        return self._default("")
