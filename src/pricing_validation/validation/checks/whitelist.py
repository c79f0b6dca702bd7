"""Whitelist validation checks.

Exchange and product type codes must be present and belong to a fixed set.
Matching is case-insensitive: "cme", "Cme" and "CME" are all accepted.
"""

from __future__ import annotations

from typing import FrozenSet, List

from pricing_validation.core.enums import ViolationKind
from pricing_validation.core.utils import is_blank
from ..config import VALID_EXCHANGES, VALID_PRODUCT_TYPES
from ..models import PricingRecord, Violation


class WhitelistCheck:
    """Validate that a code field is present and whitelisted.

    Args:
        check_id: Identifier of the check.
        field_name: Record attribute to inspect.
        allowed: Upper-case whitelist.
        missing_kind: Violation kind for an absent or blank value.
        invalid_kind: Violation kind for a value outside the whitelist.
    """

    def __init__(
        self,
        check_id: str,
        field_name: str,
        allowed: FrozenSet[str],
        missing_kind: ViolationKind,
        invalid_kind: ViolationKind,
    ) -> None:
        self.check_id = check_id
        self.field_name = field_name
        self.allowed = allowed
        self.missing_kind = missing_kind
        self.invalid_kind = invalid_kind

    def validate(self, record: PricingRecord) -> List[Violation]:
        value = getattr(record, self.field_name)
        if is_blank(value):
            return [Violation(self.missing_kind)]
        if value.strip().upper() not in self.allowed:
            return [Violation(self.invalid_kind, value)]
        return []


class ExchangeCheck(WhitelistCheck):
    """Exchange must be one of CME, NYMEX, CBOT, COMEX."""

    def __init__(self) -> None:
        super().__init__(
            "exchange",
            "exchange",
            VALID_EXCHANGES,
            ViolationKind.MISSING_EXCHANGE,
            ViolationKind.INVALID_EXCHANGE,
        )


class ProductTypeCheck(WhitelistCheck):
    """Product type must be FUT or OPT."""

    def __init__(self) -> None:
        super().__init__(
            "product_type",
            "product_type",
            VALID_PRODUCT_TYPES,
            ViolationKind.MISSING_PRODUCT_TYPE,
            ViolationKind.INVALID_PRODUCT_TYPE,
        )
