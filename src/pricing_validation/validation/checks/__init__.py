"""Validation checks base interface.

This module defines the protocol (interface) that all field checks must
implement. Each check is responsible for one field rule of a single record
(price, exchange, product type, instrument GUID, trade date). Cross-record
rules (duplicate GUIDs) live in ``duplicate_guids.py`` because they need the
whole collection.

To implement a new field check:

1. Create a new file in this directory (e.g., `my_check.py`)
2. Define a class that implements the FieldCheck protocol
3. Implement ``check_id`` and ``validate()``
4. Add the check to the FIELD_CHECKS list in registry.py (order matters:
   violation phrases are reported in registry order)

Example:
    ```python
    # checks/my_check.py
    from typing import List
    from pricing_validation.core.enums import ViolationKind
    from ..models import PricingRecord, Violation

    class MyCheck:
        check_id = "my_check"

        def validate(self, record: PricingRecord) -> List[Violation]:
            # Validation logic here
            return [Violation(ViolationKind.MISSING_EXCHANGE)]
    ```
"""

from __future__ import annotations

from typing import List, Protocol

from ..models import PricingRecord, Violation


class FieldCheck(Protocol):
    """Protocol defining the interface for single-record field checks.

    Use duck typing (Protocol) - no need to inherit from a base class.

    Attributes:
        check_id: Unique identifier for the check (e.g., "price").
    """

    check_id: str

    def validate(self, record: PricingRecord) -> List[Violation]:
        """Run the check against one record.

        Args:
            record: The record to inspect. Checks never mutate it.

        Returns:
            Violations found, in reporting order. Empty list if the field is valid.
        """
        ...


__all__ = ["FieldCheck"]
