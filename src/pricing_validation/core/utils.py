"""Core utility functions for Pricing Validation Tools.

This module provides shared value helpers used by the loader, the validation
checks, the store and the presentation layers.
"""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Optional

from .schemas import DATE_PATTERN, PRICE_PATTERN


def is_blank(value: Optional[str]) -> bool:
    """Return True for None, empty or whitespace-only strings."""
    return value is None or not str(value).strip()


def normalize_guid(guid: Optional[str]) -> Optional[str]:
    """Trim a GUID; blank GUIDs normalize to None.

    Examples:
        >>> normalize_guid("  ABC ")
        'ABC'
        >>> normalize_guid("   ") is None
        True
    """
    if is_blank(guid):
        return None
    return str(guid).strip()


def parse_trade_date(token: Optional[str]) -> Optional[date]:
    """Parse an ISO ``YYYY-MM-DD`` trade date.

    Returns None for a blank token.

    Raises:
        ValueError: If the token is not a valid ``YYYY-MM-DD`` calendar date.
    """
    if is_blank(token):
        return None
    text = str(token).strip()
    if not re.fullmatch(DATE_PATTERN, text):
        raise ValueError(f"Invalid trade date (expected YYYY-MM-DD): {text}")
    return date.fromisoformat(text)


def parse_price(token: Optional[str]) -> Optional[float]:
    """Parse a price token into a finite float.

    Returns None for a blank token.

    Only plain decimal and exponent notation is accepted; tokens such as
    ``1_000``, ``0x10``, ``nan`` or ``inf`` are rejected.

    Raises:
        ValueError: If the token is not a finite number.
    """
    if is_blank(token):
        return None
    text = str(token).strip()
    if not re.fullmatch(PRICE_PATTERN, text):
        raise ValueError(f"Invalid price (expected a decimal number): {text}")
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Price must be a finite number: {token}")
    return value


def is_acceptable_price(price: Optional[float]) -> bool:
    """Write-path price guard: an absent price is acceptable, a present one must be > 0."""
    if price is None:
        return True
    return math.isfinite(price) and price > 0


def format_price(price: Optional[float]) -> str:
    """Format a price with two decimals, blank when absent."""
    return f"{price:.2f}" if price is not None else ""


__all__ = [
    "is_blank",
    "normalize_guid",
    "parse_trade_date",
    "parse_price",
    "is_acceptable_price",
    "format_price",
]
