"""Validation configuration constants.

This module centralizes the business whitelists, the violation phrase table
and the report categorization rules. Adjust these constants to tune
validation behavior; the checks and the aggregator read them at call time.

Phrase table:
    Each ViolationKind maps to the human-readable phrase shown to operators.
    Phrases with a ``{detail}`` placeholder embed the offending value.

Categories:
    - "missing": absent required values (summed into total_missing)
    - "duplicate": primary key collisions (listed in their own report section)
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Tuple

from pricing_validation.core.enums import ViolationKind

# ============================================================================
# WHITELISTS
# ============================================================================

# Compared case-insensitively (values are upper-cased before lookup)
VALID_EXCHANGES: FrozenSet[str] = frozenset({"CME", "NYMEX", "CBOT", "COMEX"})
VALID_PRODUCT_TYPES: FrozenSet[str] = frozenset({"FUT", "OPT"})


# ============================================================================
# VIOLATION PHRASES
# ============================================================================

VIOLATION_PHRASES: Dict[ViolationKind, str] = {
    ViolationKind.MISSING_PRICE: "Missing price value",
    ViolationKind.INVALID_PRICE_FORMAT: "Invalid price format: {detail}",
    ViolationKind.NEGATIVE_PRICE: "Negative price",
    ViolationKind.ZERO_PRICE: "Zero price",
    ViolationKind.MISSING_EXCHANGE: "Missing exchange",
    ViolationKind.INVALID_EXCHANGE: "Invalid exchange: {detail}",
    ViolationKind.MISSING_PRODUCT_TYPE: "Missing product type",
    ViolationKind.INVALID_PRODUCT_TYPE: "Invalid product type: {detail}",
    ViolationKind.MISSING_GUID: "Missing instrument GUID (primary key required)",
    ViolationKind.MISSING_TRADE_DATE: "Missing trade date",
    ViolationKind.DUPLICATE_GUID: "Duplicate GUID (primary key violation)",
}

ERROR_SEPARATOR = "; "


# ============================================================================
# REPORT CATEGORIES
# ============================================================================

# The five "missing" counters; total_missing is their plain sum
MISSING_KINDS: Tuple[ViolationKind, ...] = (
    ViolationKind.MISSING_PRICE,
    ViolationKind.MISSING_GUID,
    ViolationKind.MISSING_TRADE_DATE,
    ViolationKind.MISSING_EXCHANGE,
    ViolationKind.MISSING_PRODUCT_TYPE,
)

DUPLICATE_KINDS: Tuple[ViolationKind, ...] = (ViolationKind.DUPLICATE_GUID,)

# Breakdown labels in report order (text, markdown and console renderers)
BREAKDOWN_LABELS: Tuple[Tuple[ViolationKind, str], ...] = (
    (ViolationKind.MISSING_PRICE, "Missing Price"),
    (ViolationKind.INVALID_PRICE_FORMAT, "Invalid Price Format"),
    (ViolationKind.NEGATIVE_PRICE, "Negative Price"),
    (ViolationKind.ZERO_PRICE, "Zero Price"),
    (ViolationKind.MISSING_GUID, "Missing instrument_guid"),
    (ViolationKind.MISSING_TRADE_DATE, "Missing trade_date"),
    (ViolationKind.MISSING_EXCHANGE, "Missing exchange"),
    (ViolationKind.MISSING_PRODUCT_TYPE, "Missing product_type"),
    (ViolationKind.INVALID_EXCHANGE, "Invalid exchange"),
    (ViolationKind.INVALID_PRODUCT_TYPE, "Invalid product_type"),
    (ViolationKind.DUPLICATE_GUID, "Duplicate Records"),
)


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def get_phrase(kind: ViolationKind, detail: str = "") -> str:
    """Render the operator-facing phrase for a violation.

    Args:
        kind: Violation kind.
        detail: Offending value for phrases with a ``{detail}`` placeholder.

    Returns:
        The phrase text.

    Raises:
        ValueError: If the kind has no registered phrase.

    Examples:
        >>> get_phrase(ViolationKind.INVALID_EXCHANGE, "LSE")
        'Invalid exchange: LSE'
        >>> get_phrase(ViolationKind.ZERO_PRICE)
        'Zero price'
    """
    if kind not in VIOLATION_PHRASES:
        raise ValueError(f"Unknown violation kind: {kind}")
    return VIOLATION_PHRASES[kind].format(detail=detail)
