"""Expense receipt parser - extract structured records from receipt OCR text."""

__version__ = "1.0.0"

from .config import ParserConfig
from .models import LineItem, ReceiptRecord
from .parse import ReceiptParser, parse_receipt
from .review import ReviewQueue, ReviewItem
from .export import ExcelExporter

__all__ = [
    'ParserConfig',
    'LineItem',
    'ReceiptRecord',
    'ReceiptParser',
    'parse_receipt',
    'ReviewQueue',
    'ReviewItem',
    'ExcelExporter',
]
