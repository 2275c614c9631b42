"""Structured receipt records produced by the parser."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Tuple

DEFAULT_CURRENCY = "EUR"
PLACEHOLDER_DESCRIPTION = "Receipt items"


@dataclass(frozen=True)
class LineItem:
    """One purchased good or service as itemized on a receipt."""
    description: str
    quantity: Decimal
    unit_price: Decimal
    amount: Decimal

    @classmethod
    def placeholder(cls, description: str = PLACEHOLDER_DESCRIPTION) -> "LineItem":
        """Item synthesized when no line on the receipt looks like an item."""
        return cls(
            description=description,
            quantity=Decimal("1.0"),
            unit_price=Decimal("0.0"),
            amount=Decimal("0.0"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'description': self.description,
            'quantity': str(self.quantity),
            'unit_price': str(self.unit_price),
            'amount': str(self.amount),
        }


@dataclass(frozen=True)
class ReceiptRecord:
    """
    Complete parse result for one receipt.

    The date is kept exactly as it was printed (or the clock fallback), since
    receipts from different locales use different orderings.
    """
    merchant_name: str
    address: str
    date: str
    total_amount: Decimal
    items: Tuple[LineItem, ...] = field(default_factory=tuple)
    tax_amount: Decimal = Decimal("0.0")
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        # Accept any sequence but store a tuple so the record stays immutable
        if not isinstance(self.items, tuple):
            object.__setattr__(self, 'items', tuple(self.items))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready mapping with decimals rendered as strings."""
        return {
            'merchant_name': self.merchant_name,
            'address': self.address,
            'date': self.date,
            'total_amount': str(self.total_amount),
            'tax_amount': str(self.tax_amount),
            'currency': self.currency,
            'items': [item.to_dict() for item in self.items],
        }
