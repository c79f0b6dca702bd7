"""Required fields validation checks.

Every record needs an instrument GUID (its primary key) and a trade date.
Blank GUIDs are treated as absent.
"""

from __future__ import annotations

from typing import List

from pricing_validation.core.enums import ViolationKind
from pricing_validation.core.utils import is_blank
from ..models import PricingRecord, Violation


class InstrumentGuidCheck:
    """Validate that the primary key is present."""

    check_id = "instrument_guid"

    def validate(self, record: PricingRecord) -> List[Violation]:
        if is_blank(record.instrument_guid):
            return [Violation(ViolationKind.MISSING_GUID)]
        return []


class TradeDateCheck:
    """Validate that the trade date is present."""

    check_id = "trade_date"

    def validate(self, record: PricingRecord) -> List[Violation]:
        if record.trade_date is None:
            return [Violation(ViolationKind.MISSING_TRADE_DATE)]
        return []
