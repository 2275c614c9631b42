"""Tunable settings for the receipt parser, loadable from YAML."""

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

import yaml

from .models import DEFAULT_CURRENCY, PLACEHOLDER_DESCRIPTION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParserConfig:
    """Window sizes, vocabularies and defaults used by every extraction pass."""
    currency: str = DEFAULT_CURRENCY
    currency_symbol: str = "€"

    merchant_window: int = 5
    merchant_min_length: int = 6
    merchant_default: str = "Unknown"

    address_window: int = 10
    address_keywords: Tuple[str, ...] = (
        "calle", "street", "st.", "avenue", "ave.", "road", "rd.",
    )

    date_fallback_format: str = "%d/%m/%Y"

    total_window: int = 15
    total_keywords: Tuple[str, ...] = ("total", "suma", "amount")

    tax_window: int = 10
    tax_keywords: Tuple[str, ...] = ("IVA", "VAT", "tax")

    placeholder_description: str = PLACEHOLDER_DESCRIPTION

    @classmethod
    def from_dict(cls, overrides: dict) -> "ParserConfig":
        """Build a config from a mapping, rejecting keys we don't know."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown parser config keys: {', '.join(unknown)}")

        values = {}
        for key, value in overrides.items():
            # YAML gives lists; keep the config hashable and immutable
            if isinstance(value, list):
                value = tuple(str(v) for v in value)
            values[key] = value
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Path) -> "ParserConfig":
        """
        Load parser settings from a YAML file.

        Args:
            path: Path to a YAML mapping of setting name to value

        Returns:
            ParserConfig with the file's values over the defaults
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                overrides = yaml.safe_load(f) or {}
            if not isinstance(overrides, dict):
                raise ValueError(f"Parser config must be a mapping, got {type(overrides).__name__}")
            config = cls.from_dict(overrides)
            logger.info(f"Loaded {len(overrides)} parser settings from {path}")
            return config
        except Exception as e:
            logger.error(f"Failed to load parser config: {e}")
            raise
