"""Validation check registry and runner.

This module orchestrates validation checks:
- FIELD_CHECKS: Ordered field checks applied to each record
- validate_record(): Recompute one record's validity from its fields
- identify_duplicates(): Flag later holders of already-seen GUIDs
- validate_all_records(): Field checks for every record, then one duplicate pass
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from .checks import FieldCheck
from .checks.duplicate_guids import DuplicateGuidCheck
from .checks.price import PriceCheck
from .checks.required_fields import InstrumentGuidCheck, TradeDateCheck
from .checks.whitelist import ExchangeCheck, ProductTypeCheck
from .models import PricingRecord, Violation


logger = logging.getLogger(__name__)

# Registry of field checks. Order determines the order of violation phrases
# in a record's error message.
FIELD_CHECKS: List[FieldCheck] = [
    PriceCheck(),
    ExchangeCheck(),
    ProductTypeCheck(),
    InstrumentGuidCheck(),
    TradeDateCheck(),
]

DUPLICATE_CHECK = DuplicateGuidCheck()


def validate_record(record: PricingRecord) -> PricingRecord:
    """Re-validate a single record in place.

    Resets the record to valid, then runs every field check in registry
    order. Duplicate detection is not part of this step.

    Args:
        record: Record to validate.

    Returns:
        The same record, for chaining.
    """
    violations: List[Violation] = []
    for check in FIELD_CHECKS:
        violations.extend(check.validate(record))

    record.violations = violations
    record.is_valid = not violations
    if violations:
        logger.warning(
            "Validation failed for record %s: %s",
            record.instrument_guid,
            record.validation_error,
        )
    return record


def identify_duplicates(records: Sequence[PricingRecord]) -> int:
    """Flag duplicate GUIDs across the collection (first occurrence wins).

    Args:
        records: Whole collection in current storage order.

    Returns:
        Number of records newly flagged by this pass.
    """
    return DUPLICATE_CHECK.apply(records)


def validate_all_records(records: Sequence[PricingRecord]) -> None:
    """Validate every record, then run a single duplicate pass.

    The two steps always run as a pair and in this order.

    Examples:
        >>> validate_all_records(records)
        >>> [r.is_valid for r in records]
        [True, False, True]
    """
    logger.info("Starting validation of %d records", len(records))
    for record in records:
        validate_record(record)
    identify_duplicates(records)
    invalid = sum(1 for r in records if not r.is_valid)
    logger.info("Validation completed: %d valid, %d invalid", len(records) - invalid, invalid)
