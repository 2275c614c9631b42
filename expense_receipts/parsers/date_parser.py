"""Date extraction for Spanish and English receipts."""

import re
import logging
from datetime import datetime
from typing import Callable, Optional
from .base import BaseParser, ParseResult, ReceiptContext, PRIMARY

logger = logging.getLogger(__name__)

SPANISH_MONTHS = 'ene|feb|mar|abr|may|jun|jul|ago|sep|oct|nov|dic'
ENGLISH_MONTHS = 'jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec'


class DateParser(BaseParser):
    """Specialized parser for extracting the transaction date."""

    def __init__(self, config=None, clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            config: Parser settings
            clock: Zero-argument callable giving the current time, used only
                when the receipt has no recognizable date
        """
        super().__init__(config)
        self.clock = clock or datetime.now

        # Date patterns in priority order, tried per line
        self.date_patterns = [
            (re.compile(r'(\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4})', re.ASCII), 'numeric'),
            (re.compile(r'(\d{1,2}\s+(?:' + SPANISH_MONTHS + r')\.?\s+\d{4})', re.IGNORECASE | re.ASCII), 'spanish_month'),
            (re.compile(r'(\d{1,2}\s+(?:' + ENGLISH_MONTHS + r')\.?\s+\d{4})', re.IGNORECASE | re.ASCII), 'english_month'),
        ]

    def parse(self, context: ReceiptContext) -> ParseResult:
        """
        Extract the date exactly as printed.

        Lines are scanned top to bottom and every pattern is tried on a line
        before moving to the next one, so the first dated line wins whatever
        its format.

        Args:
            context: Receipt context with normalized lines

        Returns:
            ParseResult with the matched text, or today's date from the clock
        """
        for line_idx, line in enumerate(context.lines):
            for pattern, pattern_type in self.date_patterns:
                match = pattern.search(line)
                if match:
                    result = ParseResult(
                        value=match.group(1),
                        confidence=0.9 if pattern_type == 'numeric' else 0.8,
                        source_text=line,
                        metadata={'type': PRIMARY, 'pattern_type': pattern_type, 'line_idx': line_idx}
                    )
                    self._log_result(result)
                    return result

        return self._default(self.clock().strftime(self.config.date_fallback_format))
