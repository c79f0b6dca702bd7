"""Interactive review and correction shell over a RecordStore.

Records are addressed by GUID, or by ``#<index>`` when the GUID is blank or
shared by several records. An ambiguous GUID lists the candidate indices and
asks for one of them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from pricing_validation.core.enums import Outcome
from pricing_validation.core.utils import parse_price, parse_trade_date
from pricing_validation.reporting.writer import default_report_path, write_report
from pricing_validation.store import RecordStore
from pricing_validation.validation.models import PricingRecord, RecordPatch


logger = logging.getLogger(__name__)

MENU = """
==========================================
  Pricing Data Validation & Reporting
==========================================
  1. Load data file
  2. View validation report
  3. View record
  4. Update record
  5. Correct record (including GUID)
  6. Delete record
  7. Create record
  8. Generate report file
  9. Exit
"""


class PricingShell:
    """Menu-driven operator shell.

    Args:
        store: Store to operate on.
        input_fn: Prompt reader; ``input`` by default.
        output_fn: Line writer; ``print`` by default.
        report_dir: Directory for generated report files.
        report_format: Default format for generated report files.
    """

    def __init__(
        self,
        store: RecordStore,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        report_dir: Path = Path("reports"),
        report_format: str = "text",
    ) -> None:
        self.store = store
        self._input = input_fn
        self._out = output_fn
        self.report_dir = Path(report_dir)
        self.report_format = report_format
        self._actions = {
            "1": self.load_data,
            "2": self.view_report,
            "3": self.view_record,
            "4": self.update_record,
            "5": self.correct_record,
            "6": self.delete_record,
            "7": self.create_record,
            "8": self.generate_report_file,
        }

    def run(self) -> int:
        """Loop over the menu until the operator exits or input ends."""
        while True:
            self._out(MENU)
            try:
                choice = self._ask("Select an option: ")
            except EOFError:
                return 0
            if choice == "9":
                self._out("Goodbye.")
                return 0
            action = self._actions.get(choice)
            if action is None:
                self._out("Invalid option. Please choose 1-9.")
                continue
            try:
                action()
            except EOFError:
                return 0

    # ------------------------------------------------------------------
    # Menu actions
    # ------------------------------------------------------------------

    def load_data(self) -> None:
        path = self._ask("Enter CSV file path: ")
        try:
            report = self.store.load_file(path)
        except (FileNotFoundError, ValueError) as e:
            self._out(f"Error loading data: {e}")
            return
        self._out("Data loaded successfully.")
        self._out(report.summary())

    def view_report(self) -> None:
        report = self.store.report()
        self._out(report.to_console_summary())
        for record in report.invalid_records:
            self._out("")
            self._out(self._format_record(record))

    def view_record(self) -> None:
        index = self._choose_record()
        if index is None:
            return
        record = self.store.get_by_index(index)
        self._out(self._format_record(record, index))

    def update_record(self) -> None:
        index = self._choose_record()
        if index is None:
            return
        patch = self._read_patch(allow_guid=False)
        if patch is None:
            return
        result = self.store.update(index, patch)
        self._out(result.message)
        if result.ok:
            self._out(self._format_record(result.record, result.index))

    def correct_record(self) -> None:
        index = self._choose_record()
        if index is None:
            return
        patch = self._read_patch(allow_guid=True)
        if patch is None:
            return
        result = self.store.correct(index, patch)
        self._out(result.message)
        if result.ok:
            self._out(self._format_record(result.record, result.index))

    def delete_record(self) -> None:
        index = self._choose_record()
        if index is None:
            return
        record = self.store.get_by_index(index)
        self._out(self._format_record(record, index))
        if self._ask("Delete this record? (y/n): ").lower() != "y":
            self._out("Deletion cancelled.")
            return
        result = self.store.delete(index)
        self._out(result.message)

    def create_record(self) -> None:
        patch = self._read_patch(allow_guid=True)
        if patch is None:
            return
        record = PricingRecord(
            instrument_guid=patch.instrument_guid,
            trade_date=patch.trade_date,
            price=patch.price,
            exchange=patch.exchange,
            product_type=patch.product_type,
        )
        result = self.store.create(record)
        self._out(result.message)
        if result.ok:
            self._out(self._format_record(result.record, result.index))

    def generate_report_file(self) -> None:
        default_path = default_report_path(self.report_dir, "pricing", self.report_format)
        path = self._ask(f"Output file [{default_path}]: ") or str(default_path)
        try:
            written = write_report(self.store.report(), path, self.report_format)
        except OSError as e:
            self._out(f"Error writing report: {e}")
            return
        self._out(f"Report written to {written}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def _choose_record(self) -> Optional[int]:
        """Ask for a GUID or ``#index`` and resolve it to one storage index."""
        answer = self._ask("Enter instrument GUID, or #<index> (blank = records without GUID): ")
        if answer.startswith("#"):
            try:
                ref = int(answer[1:])
            except ValueError:
                self._out(f"Invalid index: {answer[1:]}")
                return None
            lookup = self.store.resolve(ref)
        else:
            lookup = self.store.resolve(answer)

        if lookup.status == Outcome.NOT_FOUND:
            self._out(f"Record not found: {answer or '(empty GUID)'}")
            return None
        if lookup.status == Outcome.OK:
            return lookup.index

        self._out(f"Multiple records found with GUID: {answer or '(empty)'}")
        for candidate in lookup.candidates:
            self._out(f"  [Index {candidate}] {self._summary_line(self.store.get_by_index(candidate))}")
        choice = self._ask("Enter index: ")
        try:
            index = int(choice)
        except ValueError:
            self._out(f"Invalid index: {choice}")
            return None
        if index not in lookup.candidates:
            self._out(f"Index {index} is not one of the listed records.")
            return None
        return index

    def _read_patch(self, allow_guid: bool) -> Optional[RecordPatch]:
        """Prompt for each field; blank answers leave the field unchanged."""
        self._out("Leave a field blank to keep it unchanged.")
        guid = self._ask("Instrument GUID: ") if allow_guid else ""
        date_token = self._ask("Trade date (YYYY-MM-DD): ")
        price_token = self._ask("Price: ")
        exchange = self._ask("Exchange (CME, NYMEX, CBOT, COMEX): ")
        product_type = self._ask("Product type (FUT, OPT): ")
        try:
            trade_date = parse_trade_date(date_token)
            price = parse_price(price_token)
        except ValueError as e:
            self._out(f"Invalid input: {e}")
            return None
        return RecordPatch(
            instrument_guid=guid or None,
            trade_date=trade_date,
            price=price,
            exchange=exchange or None,
            product_type=product_type or None,
        )

    @staticmethod
    def _summary_line(record: PricingRecord) -> str:
        data = record.to_dict()
        return (
            f"Date: {data['trade_date'] or '(empty)'}, Price: {record.display_price() or '(empty)'}, "
            f"Exchange: {data['exchange'] or '(empty)'}, Product Type: {data['product_type'] or '(empty)'}, "
            f"Status: {data['status']}"
        )

    @staticmethod
    def _format_record(record: PricingRecord, index: Optional[int] = None) -> str:
        data = record.to_dict()
        lines = []
        if index is not None:
            lines.append(f"  Index: {index}")
        lines.extend(
            [
                f"  Instrument GUID: {data['instrument_guid'] or '(empty)'}",
                f"  Trade Date: {data['trade_date'] or '(empty)'}",
                f"  Price: {record.display_price() or '(empty)'}",
                f"  Exchange: {data['exchange'] or '(empty)'}",
                f"  Product Type: {data['product_type'] or '(empty)'}",
                f"  Status: {data['status']}",
            ]
        )
        if record.validation_error:
            lines.append(f"  Error: {record.validation_error}")
        return "\n".join(lines)
