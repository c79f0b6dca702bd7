"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class ViolationKind(str, Enum):
    """Kinds of rule violations a pricing record can carry.

    Values are strings to ease serialization (JSON reports, MCP responses).
    """

    MISSING_PRICE = "MISSING_PRICE"
    INVALID_PRICE_FORMAT = "INVALID_PRICE_FORMAT"
    NEGATIVE_PRICE = "NEGATIVE_PRICE"
    ZERO_PRICE = "ZERO_PRICE"
    MISSING_EXCHANGE = "MISSING_EXCHANGE"
    INVALID_EXCHANGE = "INVALID_EXCHANGE"
    MISSING_PRODUCT_TYPE = "MISSING_PRODUCT_TYPE"
    INVALID_PRODUCT_TYPE = "INVALID_PRODUCT_TYPE"
    MISSING_GUID = "MISSING_GUID"
    MISSING_TRADE_DATE = "MISSING_TRADE_DATE"
    DUPLICATE_GUID = "DUPLICATE_GUID"


class Outcome(str, Enum):
    """Outcome of a store lookup or mutation.

    Operation-level failures are returned as values, never raised.
    """

    OK = "ok"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"
    AMBIGUOUS = "ambiguous"


__all__ = ["ViolationKind", "Outcome"]
