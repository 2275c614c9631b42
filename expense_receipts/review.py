"""Review queue for receipts whose fields fell back to defaults."""

import logging
from typing import Dict, List, Optional
from dataclasses import dataclass
from pathlib import Path

from .models import ReceiptRecord

logger = logging.getLogger(__name__)

# Fields a reviewer has to fill in by hand when they default.
# Address and tax are optional on a receipt and never trigger review.
REVIEW_REASONS = {
    'merchant_name': "missing merchant",
    'date': "no date found, used today's date",
    'total_amount': "missing total",
    'items': "no line items found",
}


@dataclass
class ReviewItem:
    """Represents a receipt that needs manual review."""
    file_path: str
    reason: str
    suggested_merchant: Optional[str] = None
    suggested_date: Optional[str] = None
    suggested_total: Optional[str] = None
    raw_snippet: str = ""
    confidence_scores: Optional[Dict[str, float]] = None


class ReviewQueue:
    """Manages receipts that need manual review."""

    def __init__(self, snippet_length: int = 200):
        self.items: List[ReviewItem] = []
        self.snippet_length = snippet_length

    def add_item(self,
                 file_path: str,
                 reason: str,
                 suggested_merchant: Optional[str] = None,
                 suggested_date: Optional[str] = None,
                 suggested_total: Optional[str] = None,
                 raw_snippet: str = "",
                 confidence_scores: Optional[Dict[str, float]] = None):
        """Add an item to the review queue."""
        item = ReviewItem(
            file_path=file_path,
            reason=reason,
            suggested_merchant=suggested_merchant,
            suggested_date=suggested_date,
            suggested_total=suggested_total,
            raw_snippet=raw_snippet,
            confidence_scores=confidence_scores
        )

        self.items.append(item)
        logger.debug(f"Added to review queue: {Path(file_path).name} - {reason}")

    def add_from_parse(self,
                       file_path: str,
                       record: ReceiptRecord,
                       defaulted_fields: List[str],
                       raw_text: str = "",
                       confidence_scores: Optional[Dict[str, float]] = None) -> bool:
        """
        Add a parsed receipt to review if any required field was defaulted.

        Args:
            file_path: Path to the processed file
            record: Parsed receipt record
            defaulted_fields: Field names that fell back to their defaults
            raw_text: Raw OCR text for snippet
            confidence_scores: Per-field confidence from the parser

        Returns:
            True if the receipt was queued
        """
        reasons = [REVIEW_REASONS[name] for name in REVIEW_REASONS if name in defaulted_fields]
        if not reasons:
            return False

        reason = "; ".join(reasons)
        logger.info(f"Sending {Path(file_path).name} to review: {reason}")

        self.add_item(
            file_path=file_path,
            reason=reason,
            suggested_merchant=record.merchant_name,
            suggested_date=record.date,
            suggested_total=str(record.total_amount),
            raw_snippet=self._make_snippet(raw_text),
            confidence_scores=confidence_scores
        )
        return True

    def _make_snippet(self, raw_text: str) -> str:
        """Single-line snippet of the raw text, cleaned for Excel."""
        snippet = raw_text.replace('\n', ' ')[:self.snippet_length]
        snippet = ''.join(char for char in snippet if ord(char) >= 32 or char == '\t')
        if len(raw_text) > self.snippet_length:
            snippet += "..."
        return snippet

    def get_summary(self) -> Dict[str, int]:
        """Count queued receipts per reason."""
        summary: Dict[str, int] = {}
        for item in self.items:
            for reason in item.reason.split("; "):
                summary[reason] = summary.get(reason, 0) + 1
        return summary
