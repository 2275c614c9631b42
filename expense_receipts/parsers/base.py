"""Base classes for receipt parsers."""

from abc import ABC, abstractmethod
from typing import Optional, Any, Dict, List
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import logging
import re

from ..config import ParserConfig

logger = logging.getLogger(__name__)

# Result types recorded in ParseResult.metadata['type']
PRIMARY = 'primary'
FALLBACK = 'fallback'
DEFAULT = 'default'


@dataclass
class ParseResult:
    """Result of a parsing operation with confidence and metadata."""
    value: Any
    confidence: float
    source_text: str = ""
    metadata: Dict[str, Any] = None

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {}

    @property
    def is_default(self) -> bool:
        return self.metadata.get('type') == DEFAULT


@dataclass
class ReceiptContext:
    """Context information about a receipt for parsing."""
    full_text: str
    lines: List[str] = None

    def __post_init__(self):
        if self.lines is None:
            self.lines = normalize_lines(self.full_text)


def normalize_lines(text: str) -> List[str]:
    """Split on line breaks, trim, and drop blank lines, keeping order."""
    if not text:
        return []
    return [line.strip() for line in text.split('\n') if line.strip()]


def to_decimal(token: Optional[str], default: Optional[Decimal] = None) -> Optional[Decimal]:
    """Parse a numeric token, accepting comma as the decimal separator."""
    if token is None:
        return default
    try:
        return Decimal(token.strip().replace(',', '.'))
    except InvalidOperation:
        return default


class BaseParser(ABC):
    """Base class for all receipt parsers."""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def parse(self, context: ReceiptContext) -> ParseResult:
        """
        Parse the specific field from receipt context.

        Args:
            context: Receipt context with normalized lines

        Returns:
            ParseResult with value and confidence. Parsers never fail: a miss
            returns the field's default with metadata type 'default'.
        """
        pass

    def _default(self, value: Any) -> ParseResult:
        """Result used when no pattern matched."""
        result = ParseResult(value=value, confidence=0.0, metadata={'type': DEFAULT})
        self._log_result(result)
        return result

    def _log_result(self, result: ParseResult):
        """Log parsing result for debugging."""
        if result.is_default:
            self.logger.warning(f"No match, using default: {result.value!r}")
        else:
            self.logger.info(f"Parsed: {result.value!r} (confidence: {result.confidence:.2f})")

    @staticmethod
    def _keyword_alternation(keywords) -> str:
        """Regex alternation group matching any of the given literal keywords."""
        return '(?:' + '|'.join(re.escape(k) for k in keywords) + ')'
