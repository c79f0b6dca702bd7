"""Validation system for Pricing Validation Tools.

This module provides the validation framework for pricing records:

- **Models**: PricingRecord, RecordPatch, Violation, ValidationReport
- **Checks**: Individual field checks and the duplicate GUID check (see validation/checks/)
- **Config**: Whitelists, violation phrases and report categories (import from .config)
- **Registry**: validate_record(), identify_duplicates(), validate_all_records()
- **Ordering**: display_order() - presentation order without touching storage order
- **Aggregator**: build_report() - counts and detail lists

Usage:
    >>> from pricing_validation.validation import validate_all_records, build_report
    >>> validate_all_records(records)
    >>> print(build_report(records).summary())
"""

from __future__ import annotations

from .aggregator import build_report
from .models import PricingRecord, RecordPatch, ValidationReport, Violation
from .ordering import compare_guids, display_order
from .registry import identify_duplicates, validate_all_records, validate_record

__all__ = [
    # Data models
    "PricingRecord",
    "RecordPatch",
    "ValidationReport",
    "Violation",
    # Engine
    "validate_record",
    "identify_duplicates",
    "validate_all_records",
    # Presentation helpers
    "display_order",
    "compare_guids",
    "build_report",
]
