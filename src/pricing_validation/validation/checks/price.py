"""Price validation check.

A price must be present and strictly positive. When the loader captured a
token that failed numeric parse, the violation quotes that token instead of
reporting the price as missing.
"""

from __future__ import annotations

from typing import List

from pricing_validation.core.enums import ViolationKind
from ..models import PricingRecord, Violation


class PriceCheck:
    """Validate that the price is present, parseable and positive."""

    check_id = "price"

    def validate(self, record: PricingRecord) -> List[Violation]:
        if record.price is None:
            if record.original_price_value:
                return [Violation(ViolationKind.INVALID_PRICE_FORMAT, record.original_price_value)]
            return [Violation(ViolationKind.MISSING_PRICE)]
        if record.price < 0:
            return [Violation(ViolationKind.NEGATIVE_PRICE)]
        if record.price == 0:
            return [Violation(ViolationKind.ZERO_PRICE)]
        return []
