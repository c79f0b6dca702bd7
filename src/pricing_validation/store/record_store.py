"""In-memory record store with re-validation on mutation.

The store owns the ordered record collection. A record's index (its position
in storage order) is the only stable address for records whose GUID is blank
or duplicated; indices change only on ``load`` (full reset) and ``delete``
(later records shift down by one).

Every public method runs under one re-entrant lock, so a mutation, its
duplicate re-scan and its report rebuild are observed atomically by readers.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable, List, Optional, Union

from pricing_validation.core.enums import Outcome
from pricing_validation.core.utils import is_acceptable_price, normalize_guid
from pricing_validation.ingestion.csv_loader import load_records
from pricing_validation.validation.aggregator import build_report
from pricing_validation.validation.models import PricingRecord, RecordPatch, ValidationReport
from pricing_validation.validation.ordering import display_order
from pricing_validation.validation.registry import (
    identify_duplicates,
    validate_all_records,
    validate_record,
)
from .results import Lookup, OperationResult


logger = logging.getLogger(__name__)

# An int addresses a storage index, a str addresses a GUID (blank = no-GUID bucket)
RecordRef = Union[int, str]


def _is_index(ref: RecordRef) -> bool:
    # bool is an int subclass but never a valid index
    return isinstance(ref, int) and not isinstance(ref, bool)


def _describe(ref: RecordRef) -> str:
    if _is_index(ref):
        return f"at index {ref}"
    return f"{ref!r}" if normalize_guid(ref) else "with empty GUID"


class RecordStore:
    """Ordered, validated collection of pricing records.

    Examples:
        >>> store = RecordStore()
        >>> report = store.load(records)
        >>> store.update(0, RecordPatch(price=101.5)).ok
        True
    """

    def __init__(self) -> None:
        self._records: List[PricingRecord] = []
        self._report: Optional[ValidationReport] = None
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, raw_records: Iterable[PricingRecord]) -> ValidationReport:
        """Replace the whole collection, validate it and rebuild the report."""
        with self._lock:
            self._records = list(raw_records)
            validate_all_records(self._records)
            self._report = build_report(self._records)
            logger.info(
                "Data loaded and validated. Total records: %d, Valid: %d, Invalid: %d",
                self._report.total,
                self._report.valid,
                self._report.invalid,
            )
            return self._report

    def load_file(self, path: Union[str, Path]) -> ValidationReport:
        """Parse a CSV file and load it.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not a readable pricing CSV. The store
                is left unchanged.
        """
        logger.info("Loading data from file: %s", path)
        records = load_records(Path(path))
        return self.load(records)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_all(self) -> List[PricingRecord]:
        """Snapshot of the records in storage order."""
        with self._lock:
            return list(self._records)

    def get_all_sorted(self) -> List[PricingRecord]:
        """Snapshot of the records in display order."""
        with self._lock:
            return display_order(self._records)

    def get_by_index(self, index: int) -> Optional[PricingRecord]:
        with self._lock:
            if 0 <= index < len(self._records):
                return self._records[index]
            return None

    def get_by_guid(self, guid: Optional[str]) -> Optional[PricingRecord]:
        """First record (storage order) holding ``guid``.

        The match may itself be flagged invalid; use ``get_all_by_guid`` or
        ``resolve`` to detect ambiguity.
        """
        with self._lock:
            indices = self._indices_for_guid(guid)
            return self._records[indices[0]] if indices else None

    def get_all_by_guid(self, guid: Optional[str]) -> List[PricingRecord]:
        with self._lock:
            return [self._records[i] for i in self._indices_for_guid(guid)]

    def index_of(self, record: PricingRecord) -> Optional[int]:
        """Storage index of ``record`` by identity, or None."""
        with self._lock:
            for i, candidate in enumerate(self._records):
                if candidate is record:
                    return i
            return None

    def resolve(self, ref: RecordRef) -> Lookup:
        """Resolve a reference to exactly one record, or explain why not.

        An index resolves to OK or NOT_FOUND. A GUID held by several records
        (including the blank-GUID bucket) resolves to AMBIGUOUS with every
        candidate index, so callers can ask for an index.
        """
        with self._lock:
            if _is_index(ref):
                record = self.get_by_index(ref)
                if record is None:
                    return Lookup(Outcome.NOT_FOUND)
                return Lookup(Outcome.OK, ref, record)

            if not isinstance(ref, str):
                return Lookup(Outcome.NOT_FOUND)
            indices = self._indices_for_guid(ref)
            if not indices:
                return Lookup(Outcome.NOT_FOUND)
            if len(indices) > 1:
                return Lookup(Outcome.AMBIGUOUS, candidates=indices)
            return Lookup(Outcome.OK, indices[0], self._records[indices[0]])

    def report(self) -> ValidationReport:
        """Current report, built on first access."""
        with self._lock:
            if self._report is None:
                self._report = build_report(self._records)
            return self._report

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def update(self, ref: RecordRef, patch: RecordPatch) -> OperationResult:
        """Merge the present fields of ``patch`` into the target record.

        ``patch.instrument_guid`` is ignored; use ``correct`` to rename.
        A present price must be > 0, otherwise nothing is written.
        """
        with self._lock:
            index = self._locate(ref)
            if index is None:
                logger.warning("Record %s not found for update", _describe(ref))
                return OperationResult.not_found(f"Record {_describe(ref)} not found")
            if not is_acceptable_price(patch.price):
                logger.warning("Cannot update record with price <= 0: %s", patch.price)
                return OperationResult.rejected("Price must be greater than zero", index)

            record = self._records[index]
            self._apply_fields(record, patch)
            self._revalidate(record)
            logger.info("Record %s updated successfully", _describe(ref))
            return OperationResult.success("Record updated successfully", index, record)

    def correct(self, ref: RecordRef, patch: RecordPatch) -> OperationResult:
        """Like ``update``, and additionally rename the GUID.

        A non-blank ``patch.instrument_guid`` already held by a different
        record rejects the whole correction before anything is written.
        """
        with self._lock:
            index = self._locate(ref)
            if index is None:
                logger.warning("Record %s not found for correction", _describe(ref))
                return OperationResult.not_found(f"Record {_describe(ref)} not found")
            if not is_acceptable_price(patch.price):
                logger.warning("Cannot correct record with price <= 0: %s", patch.price)
                return OperationResult.rejected("Price must be greater than zero", index)

            record = self._records[index]
            new_guid = normalize_guid(patch.instrument_guid)
            if new_guid is not None:
                taken = any(
                    other is not record and normalize_guid(other.instrument_guid) == new_guid
                    for other in self._records
                )
                if taken:
                    logger.warning("Cannot assign GUID %s - already exists in another record", new_guid)
                    return OperationResult.rejected(
                        f"GUID {new_guid} already exists in another record", index
                    )
                old_guid = record.instrument_guid
                record.instrument_guid = new_guid
                logger.info("GUID corrected: %s -> %s", old_guid or "(empty)", new_guid)

            self._apply_fields(record, patch)
            self._revalidate(record)
            logger.info("Record %s corrected successfully", _describe(ref))
            return OperationResult.success("Record corrected successfully", index, record)

    def delete(self, ref: RecordRef) -> OperationResult:
        """Remove the target record; later indices shift down by one.

        Duplicate flags on surviving records are left as they are until the
        next mutation re-scans the collection.
        """
        with self._lock:
            index = self._locate(ref)
            if index is None:
                logger.warning("Record %s not found for deletion", _describe(ref))
                return OperationResult.not_found(f"Record {_describe(ref)} not found")
            record = self._records.pop(index)
            self._report = build_report(self._records)
            logger.info("Record %s deleted successfully", _describe(ref))
            return OperationResult.success("Record deleted successfully", index, record)

    def create(self, record: PricingRecord) -> OperationResult:
        """Append a new record at the highest index and validate it."""
        with self._lock:
            if not is_acceptable_price(record.price):
                logger.warning("Cannot create record with price <= 0: %s", record.price)
                return OperationResult.rejected("Price must be greater than zero")
            self._records.append(record)
            validate_record(record)
            identify_duplicates(self._records)
            self._report = build_report(self._records)
            index = len(self._records) - 1
            logger.info("Record %s created successfully at index %d", record.instrument_guid, index)
            return OperationResult.success("Record created successfully", index, record)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _indices_for_guid(self, guid: Optional[str]) -> List[int]:
        wanted = normalize_guid(guid)
        return [
            i for i, record in enumerate(self._records)
            if normalize_guid(record.instrument_guid) == wanted
        ]

    def _locate(self, ref: RecordRef) -> Optional[int]:
        if _is_index(ref):
            return ref if 0 <= ref < len(self._records) else None
        if not isinstance(ref, str):
            return None
        indices = self._indices_for_guid(ref)
        return indices[0] if indices else None

    @staticmethod
    def _apply_fields(record: PricingRecord, patch: RecordPatch) -> None:
        if patch.price is not None:
            record.price = patch.price
            record.original_price_value = None
        if patch.exchange is not None:
            record.exchange = patch.exchange
        if patch.product_type is not None:
            record.product_type = patch.product_type
        if patch.trade_date is not None:
            record.trade_date = patch.trade_date

    def _revalidate(self, record: PricingRecord) -> None:
        validate_record(record)
        identify_duplicates(self._records)
        self._report = build_report(self._records)
