"""Data schema and field definitions for pricing records.

This module defines the fixed five-field record layout shared by the CSV
loader and the value helpers.
"""

from __future__ import annotations

from typing import List

# Positional CSV layout: the loader reads the first five columns in this order
# regardless of header spelling.
PRICE_COLUMNS: List[str] = [
    "instrument_guid",
    "trade_date",
    "price",
    "exchange",
    "product_type",
]

DATE_PATTERN = r"\d{4}-\d{2}-\d{2}"

# Plain decimal or exponent notation, optionally signed
PRICE_PATTERN = r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?"


def get_required_columns() -> List[str]:
    """Get the CSV columns a pricing file must provide (by position).

    Examples:
        >>> get_required_columns()[0]
        'instrument_guid'
    """
    return list(PRICE_COLUMNS)


__all__ = ["PRICE_COLUMNS", "DATE_PATTERN", "PRICE_PATTERN", "get_required_columns"]
