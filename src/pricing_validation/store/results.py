"""Result types returned by RecordStore lookups and mutations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pricing_validation.core.enums import Outcome
from pricing_validation.validation.models import PricingRecord


@dataclass(frozen=True)
class Lookup:
    """Three-way resolution of a GUID-or-index reference.

    Attributes:
        status: OK (exactly one match), NOT_FOUND, or AMBIGUOUS.
        index: Storage index of the match when status is OK.
        record: The matched record when status is OK.
        candidates: Storage indices of every match when status is AMBIGUOUS.
    """

    status: Outcome
    index: Optional[int] = None
    record: Optional[PricingRecord] = None
    candidates: List[int] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.status == Outcome.OK


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a store mutation.

    Attributes:
        status: OK, NOT_FOUND or REJECTED.
        message: Operator-facing description of the outcome.
        index: Storage index of the affected record (after the operation for
            update/correct/create, before removal for delete).
        record: The affected record.
    """

    status: Outcome
    message: str
    index: Optional[int] = None
    record: Optional[PricingRecord] = None

    @property
    def ok(self) -> bool:
        return self.status == Outcome.OK

    @classmethod
    def success(cls, message: str, index: int, record: PricingRecord) -> "OperationResult":
        return cls(Outcome.OK, message, index, record)

    @classmethod
    def not_found(cls, message: str) -> "OperationResult":
        return cls(Outcome.NOT_FOUND, message)

    @classmethod
    def rejected(cls, message: str, index: Optional[int] = None) -> "OperationResult":
        return cls(Outcome.REJECTED, message, index)
