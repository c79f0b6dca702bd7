"""Duplicate GUID validation check.

The instrument GUID is the primary key. Within the current storage order the
first holder of a GUID wins; every later holder is flagged invalid. The first
holder is never penalized, even when it is invalid for other reasons.
"""

from __future__ import annotations

import logging
from typing import Sequence, Set

from pricing_validation.core.enums import ViolationKind
from pricing_validation.core.utils import normalize_guid
from ..models import PricingRecord, Violation


logger = logging.getLogger(__name__)


class DuplicateGuidCheck:
    """Flag later holders of an already-seen GUID.

    Re-applying the check is idempotent: a record already carrying a
    duplicate violation is not flagged twice.
    """

    check_id = "duplicate_guids"

    def apply(self, records: Sequence[PricingRecord]) -> int:
        """Scan ``records`` left to right and flag duplicates in place.

        Args:
            records: The whole collection in storage order.

        Returns:
            Number of records newly flagged by this pass.
        """
        seen: Set[str] = set()
        newly_flagged = 0
        for record in records:
            guid = normalize_guid(record.instrument_guid)
            # Blank GUIDs were already flagged by the field checks
            if guid is None:
                continue
            if guid not in seen:
                seen.add(guid)
                continue
            record.is_valid = False
            if not record.has_violation(ViolationKind.DUPLICATE_GUID):
                record.violations.append(Violation(ViolationKind.DUPLICATE_GUID))
                newly_flagged += 1
                logger.warning("Duplicate GUID found: %s - marking as invalid", guid)
        return newly_flagged
