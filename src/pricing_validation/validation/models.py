"""Validation data models.

This module defines core data structures for pricing validation:
- Violation: One tagged rule violation carried by a record
- PricingRecord: Mutable pricing record with its validity state
- RecordPatch: Partial update where absent fields mean "leave unchanged"
- ValidationReport: Aggregated, disposable view over the record collection
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from pricing_validation.core.enums import ViolationKind
from pricing_validation.core.utils import format_price, is_blank
from .config import BREAKDOWN_LABELS, ERROR_SEPARATOR, MISSING_KINDS, get_phrase


@dataclass(frozen=True)
class Violation:
    """A single rule violation.

    Attributes:
        kind: Violation category used for report counting.
        detail: Offending value (e.g. the unparseable price token), or "".

    Examples:
        >>> Violation(ViolationKind.INVALID_EXCHANGE, "LSE").message
        'Invalid exchange: LSE'
    """

    kind: ViolationKind
    detail: str = ""

    @property
    def message(self) -> str:
        return get_phrase(self.kind, self.detail)


@dataclass
class PricingRecord:
    """A pricing record as loaded from the source file or created by an operator.

    Attributes:
        instrument_guid: Intended primary key; blank is treated as absent.
        trade_date: Trade date, None when missing or unparseable.
        price: Price, None when missing or when the source token failed to parse.
        exchange: Exchange code, checked case-insensitively against the whitelist.
        product_type: Product type code, checked case-insensitively against the whitelist.
        original_price_value: Source token of a price that failed numeric parse.
            Never set together with ``price``.
        is_valid: Recomputed by every validation pass.
        violations: Ordered violations found by the last validation pass.
    """

    instrument_guid: Optional[str] = None
    trade_date: Optional[date] = None
    price: Optional[float] = None
    exchange: Optional[str] = None
    product_type: Optional[str] = None
    original_price_value: Optional[str] = None
    is_valid: bool = True
    violations: List[Violation] = field(default_factory=list)

    @property
    def validation_error(self) -> Optional[str]:
        """All violation phrases joined with "; ", or None when valid."""
        if not self.violations:
            return None
        return ERROR_SEPARATOR.join(v.message for v in self.violations)

    def has_violation(self, kind: ViolationKind) -> bool:
        return any(v.kind == kind for v in self.violations)

    def display_price(self) -> str:
        """Price cell text: two decimals, the rejected source token, or blank."""
        if self.price is not None:
            return format_price(self.price)
        return self.original_price_value or ""

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation with blanks rendered as empty strings."""
        if self.price is not None:
            price: Any = self.price
        elif self.original_price_value:
            price = self.original_price_value
        else:
            price = None
        return {
            "instrument_guid": _cell(self.instrument_guid),
            "trade_date": self.trade_date.isoformat() if self.trade_date else "",
            "price": price,
            "exchange": _cell(self.exchange),
            "product_type": _cell(self.product_type),
            "status": "VALID" if self.is_valid else "INVALID",
            "error": self.validation_error,
        }


@dataclass(frozen=True)
class RecordPatch:
    """Partial record update.

    A field left as None is a skip marker, never a clear marker.
    ``instrument_guid`` is only honored by ``RecordStore.correct``.
    """

    instrument_guid: Optional[str] = None
    trade_date: Optional[date] = None
    price: Optional[float] = None
    exchange: Optional[str] = None
    product_type: Optional[str] = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.instrument_guid,
                self.trade_date,
                self.price,
                self.exchange,
                self.product_type,
            )
        )


@dataclass
class ValidationReport:
    """Aggregated validation results for the current record collection.

    The report is rebuilt from scratch after every load and mutation; it has
    no identity of its own and is never mutated by collaborators.

    Attributes:
        total: Number of records.
        valid: Number of valid records.
        invalid: Number of invalid records.
        counts: Invalid-record count per violation kind. A record carrying
            several kinds increments several counters.
        duplicate_count: Records flagged as duplicate GUID holders.
        invalid_records: Invalid records in storage order.
        duplicate_records: Records flagged duplicate, in storage order.
        duplicate_info: "<guid> - <trade date>" line per duplicate record.
        all_records: Every record in display order.
        generated_at: Build timestamp.

    Examples:
        >>> report = build_report(records)
        >>> report.total_missing == sum(report.count(k) for k in MISSING_KINDS)
        True
    """

    total: int
    valid: int
    invalid: int
    counts: Dict[ViolationKind, int]
    duplicate_count: int
    invalid_records: List[PricingRecord] = field(default_factory=list)
    duplicate_records: List[PricingRecord] = field(default_factory=list)
    duplicate_info: List[str] = field(default_factory=list)
    all_records: List[PricingRecord] = field(default_factory=list)
    generated_at: datetime = field(default_factory=datetime.now)

    def count(self, kind: ViolationKind) -> int:
        return self.counts.get(kind, 0)

    @property
    def total_missing(self) -> int:
        """Sum of the five missing-field counters (not deduplicated)."""
        return sum(self.count(kind) for kind in MISSING_KINDS)

    def has_errors(self) -> bool:
        return self.invalid > 0

    def breakdown(self) -> List[Tuple[str, int]]:
        """Non-zero (label, count) pairs in report order."""
        return [(label, self.count(kind)) for kind, label in BREAKDOWN_LABELS if self.count(kind)]

    def summary(self) -> str:
        """Generate a concise text summary of validation results.

        Examples:
            >>> print(report.summary())
            Validation Summary:
              Records: 10 total (7 valid, 3 invalid)
              Duplicates: 1
              Missing Values: 2
        """
        return (
            f"Validation Summary:\n"
            f"  Records: {self.total} total ({self.valid} valid, {self.invalid} invalid)\n"
            f"  Duplicates: {self.duplicate_count}\n"
            f"  Missing Values: {self.total_missing}"
        )

    def to_console_summary(self) -> str:
        """Summary plus a brief error breakdown for console output."""
        lines = [self.summary(), ""]
        if not self.has_errors():
            lines.append("✅ All records passed validation!")
        else:
            lines.append("Error Breakdown:")
            for label, value in self.breakdown():
                lines.append(f"❌ {label}: {value}")
        return "\n".join(lines)

    def to_text(self) -> str:
        """Generate the full plain-text validation report.

        Sections: header, counts, error breakdown, invalid record details,
        duplicate details, missing value details per field, and a table of
        all records in display order.
        """
        lines: List[str] = [
            "=" * 43,
            "",
            "Pricing Data Validation Report",
            "",
            "=" * 43,
            "",
            f"Total Records: {self.total}",
            "",
            f"Valid Records: {self.valid}",
            "",
            f"Invalid Records: {self.invalid}",
            "",
            f"Duplicate Records: {self.duplicate_count}",
            "",
            f"Missing Values: {self.total_missing}",
            "",
            "Error Breakdown:",
            "",
            "-" * 27,
            "",
        ]
        for label, value in self.breakdown():
            lines.append(f"{label}: {value}")
        lines.append("")
        lines.append("-" * 27)

        if self.invalid_records:
            lines.append("INVALID RECORDS DETAILS")
            lines.append("-" * 80)
            for record in self.invalid_records:
                lines.extend(_detail_block(record))

        if self.duplicate_records:
            lines.append("DUPLICATE RECORDS DETAILS")
            lines.append("-" * 80)
            for record in self.duplicate_records:
                lines.extend(_detail_block(record))

        if self.total_missing > 0:
            lines.append("MISSING VALUES DETAILS")
            lines.append("-" * 80)
            for kind, title, missing_field in _MISSING_SECTIONS:
                if not self.count(kind):
                    continue
                lines.append(f"{title}:")
                for record in self.invalid_records:
                    if record.has_violation(kind):
                        lines.append("  - " + _other_fields(record, missing_field))
                lines.append("")

        lines.append("ALL RECORDS")
        lines.append("-" * 80)
        lines.append(_TABLE_ROW.format(*_TABLE_HEADER))
        lines.append("-" * 80)
        for record in self.all_records:
            lines.append(
                _TABLE_ROW.format(
                    _cell(record.instrument_guid),
                    record.trade_date.isoformat() if record.trade_date else "",
                    record.display_price(),
                    _cell(record.exchange),
                    _cell(record.product_type),
                    "VALID" if record.is_valid else "INVALID",
                ).rstrip()
            )
        lines.extend(["", "=" * 80, "End of Report", "=" * 80, ""])
        return "\n".join(lines)

    def to_markdown(self) -> str:
        """Generate a Markdown validation report.

        Examples:
            >>> markdown = report.to_markdown()
            >>> with open("validation_report.md", "w") as f:
            ...     f.write(markdown)
        """
        lines = [
            "# Pricing Data Validation Report",
            "",
            f"**Generated:** {self.generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            "## Summary",
            "",
            f"- **Total Records:** {self.total}",
            f"- **Valid Records:** {self.valid} ✅",
            f"- **Invalid Records:** {self.invalid} ❌" if self.invalid else "- **Invalid Records:** 0",
            f"- **Duplicate Records:** {self.duplicate_count}",
            f"- **Missing Values:** {self.total_missing}",
            "",
        ]

        if not self.has_errors():
            lines.append("## ✅ All Records Passed")
            lines.append("")
            lines.append("No validation issues found.")
            lines.append("")
        else:
            lines.append("## Error Breakdown")
            lines.append("")
            lines.append("| Category | Records |")
            lines.append("|---|---|")
            for label, value in self.breakdown():
                lines.append(f"| {label} | {value} |")
            lines.append("")
            lines.append("## ❌ Invalid Records")
            lines.append("")
            lines.append("| Instrument GUID | Trade Date | Price | Exchange | Product Type | Error |")
            lines.append("|---|---|---|---|---|---|")
            for record in self.invalid_records:
                lines.append(
                    "| {} | {} | {} | {} | {} | {} |".format(
                        _cell(record.instrument_guid),
                        record.trade_date.isoformat() if record.trade_date else "",
                        record.display_price(),
                        _cell(record.exchange),
                        _cell(record.product_type),
                        record.validation_error or "",
                    )
                )
            lines.append("")

        if self.duplicate_info:
            lines.append("## Duplicate GUIDs")
            lines.append("")
            for entry in self.duplicate_info:
                lines.append(f"- {entry}")
            lines.append("")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": {"generated_at": self.generated_at.isoformat()},
            "summary": {
                "total_records": self.total,
                "valid_records": self.valid,
                "invalid_records": self.invalid,
                "duplicate_records": self.duplicate_count,
                "total_missing": self.total_missing,
            },
            "counts": {kind.value: self.count(kind) for kind in ViolationKind},
            "invalid_records": [r.to_dict() for r in self.invalid_records],
            "duplicate_records": self.duplicate_info,
            "all_records": [r.to_dict() for r in self.all_records],
        }

    def to_json(self) -> str:
        """Generate a detailed JSON validation report."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


_TABLE_HEADER = ("Instrument GUID", "Trade Date", "Price", "Exchange", "Product Type", "Status")
_TABLE_ROW = "{:<15} {:<12} {:<10} {:<8} {:<12} {:<8}"

# (kind, section title, field that is missing and therefore omitted)
_MISSING_SECTIONS = (
    (ViolationKind.MISSING_PRICE, "Missing Price Records", "price"),
    (ViolationKind.MISSING_GUID, "Missing Instrument GUID Records", "instrument_guid"),
    (ViolationKind.MISSING_TRADE_DATE, "Missing Trade Date Records", "trade_date"),
    (ViolationKind.MISSING_EXCHANGE, "Missing Exchange Records", "exchange"),
    (ViolationKind.MISSING_PRODUCT_TYPE, "Missing Product Type Records", "product_type"),
)


def _cell(value: Optional[str]) -> str:
    return "" if is_blank(value) else str(value)


def _field_cells(record: PricingRecord) -> List[Tuple[str, str, str]]:
    return [
        ("instrument_guid", "GUID", _cell(record.instrument_guid)),
        ("trade_date", "Trade Date", record.trade_date.isoformat() if record.trade_date else ""),
        ("price", "Price", record.display_price()),
        ("exchange", "Exchange", _cell(record.exchange)),
        ("product_type", "Product Type", _cell(record.product_type)),
    ]


def _other_fields(record: PricingRecord, missing_field: str) -> str:
    return ", ".join(
        f"{label}: {value}" for name, label, value in _field_cells(record) if name != missing_field
    )


def _detail_block(record: PricingRecord) -> List[str]:
    cells = {name: value for name, _, value in _field_cells(record)}
    return [
        f"Instrument GUID: {cells['instrument_guid']}",
        f"  Trade Date:    {cells['trade_date']}",
        f"  Price:         {cells['price']}",
        f"  Exchange:      {cells['exchange']}",
        f"  Product Type:  {cells['product_type']}",
        f"  Error:         {record.validation_error or ''}",
        "",
    ]
