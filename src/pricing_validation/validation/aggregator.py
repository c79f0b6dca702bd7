"""Report aggregation over the current record collection."""

from __future__ import annotations

from typing import Dict, Sequence

from pricing_validation.core.enums import ViolationKind
from .config import DUPLICATE_KINDS
from .models import PricingRecord, ValidationReport
from .ordering import display_order


def build_report(records: Sequence[PricingRecord]) -> ValidationReport:
    """Derive counts and categorized detail lists from the records.

    Each invalid record increments one counter per distinct violation kind it
    carries, so a record missing both price and GUID counts in both.

    Args:
        records: The collection in storage order.

    Returns:
        A freshly built ValidationReport.
    """
    counts: Dict[ViolationKind, int] = {kind: 0 for kind in ViolationKind}
    invalid_records = []
    duplicate_records = []
    duplicate_info = []

    for record in records:
        if record.is_valid:
            continue
        invalid_records.append(record)
        for kind in {v.kind for v in record.violations}:
            counts[kind] += 1
        if any(record.has_violation(kind) for kind in DUPLICATE_KINDS):
            duplicate_records.append(record)
            trade_date = record.trade_date.isoformat() if record.trade_date else ""
            duplicate_info.append(f"{record.instrument_guid} - {trade_date}")

    return ValidationReport(
        total=len(records),
        valid=len(records) - len(invalid_records),
        invalid=len(invalid_records),
        counts=counts,
        duplicate_count=len(duplicate_records),
        invalid_records=invalid_records,
        duplicate_records=duplicate_records,
        duplicate_info=duplicate_info,
        all_records=display_order(records),
    )
