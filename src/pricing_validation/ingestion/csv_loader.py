"""CSV loader for pricing files.

Reads the first five columns by position (instrument GUID, trade date, price,
exchange, product type) and turns each data row into a raw, not yet
validated PricingRecord. Unparseable cells never abort the load:

- a malformed trade date becomes None;
- a price token that fails numeric parse is kept in ``original_price_value``
  with ``price`` left as None, so validation can quote it;
- fields beyond the fifth are ignored;
- a row with fewer than five fields is skipped with a warning.

Only file-level problems (missing file, wrong format, unreadable CSV) raise.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import pandas as pd

from pricing_validation.core.schemas import PRICE_COLUMNS, get_required_columns
from pricing_validation.core.utils import parse_price, parse_trade_date
from pricing_validation.validation.models import PricingRecord


logger = logging.getLogger(__name__)

# Data rows start on line 2 (line 1 is the header)
_FIRST_DATA_LINE = 2

_READ_OPTIONS = dict(
    keep_default_na=False,
    skipinitialspace=True,
    encoding="utf-8-sig",
)


def _raw_cell(value):
    """Identity converter: keeps cells as text and absent fields as None."""
    return value


def load_records(path: Path) -> List[PricingRecord]:
    """Parse a pricing CSV file into raw records.

    Args:
        path: Path to a ``.csv`` file with a header row.

    Returns:
        Records in file order. Empty list for an empty or header-only file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a CSV, cannot be parsed, or has fewer
            than five columns.

    Examples:
        >>> records = load_records(Path("data/pricing.csv"))
        >>> records[0].instrument_guid
        '1001'
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Pricing file not found: {path}")
    if path.suffix.lower() != ".csv":
        raise ValueError(f"Unsupported file format: {path.name}. Please use CSV format.")

    logger.info("Parsing CSV file: %s", path)
    width = len(PRICE_COLUMNS)
    try:
        header = pd.read_csv(path, engine="python", nrows=0, index_col=False, **_READ_OPTIONS)
    except pd.errors.EmptyDataError:
        logger.warning("CSV file is empty or has no header: %s", path)
        return []
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise ValueError(f"Failed to read CSV file {path}: {e}") from e

    if len(header.columns) < width:
        raise ValueError(
            f"CSV file {path} has {len(header.columns)} columns, expected at least "
            f"{width}: {', '.join(get_required_columns())}"
        )

    # The python engine with positional usecols tolerates rows of any length
    # and leaves absent trailing fields as None, unlike present empty cells.
    try:
        df = pd.read_csv(
            path,
            engine="python",
            index_col=False,
            usecols=list(range(width)),
            converters={i: _raw_cell for i in range(width)},
            skip_blank_lines=False,
            **_READ_OPTIONS,
        )
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise ValueError(f"Failed to read CSV file {path}: {e}") from e

    records: List[PricingRecord] = []
    for line_number, row in enumerate(df.itertuples(index=False, name=None), start=_FIRST_DATA_LINE):
        present = [value for value in row if not pd.isna(value)]
        if not present:
            continue
        if len(present) < width:
            logger.warning(
                "Line %d has insufficient columns (expected %d, found %d)",
                line_number,
                width,
                len(present),
            )
            continue
        cells = [str(value).strip() for value in present]
        if not any(cells):
            continue
        records.append(parse_row(cells, line_number))

    logger.info("Successfully parsed %d records from CSV file", len(records))
    return records


def parse_row(cells: Sequence[str], line_number: Optional[int] = None) -> PricingRecord:
    """Build a raw record from five trimmed cells."""
    guid, date_token, price_token, exchange, product_type = cells[: len(PRICE_COLUMNS)]
    record = PricingRecord(instrument_guid=guid, exchange=exchange, product_type=product_type)

    try:
        record.trade_date = parse_trade_date(date_token)
    except ValueError:
        logger.warning("Invalid date format on line %s: %s", line_number, date_token)

    try:
        record.price = parse_price(price_token)
    except ValueError:
        logger.warning("Invalid price format on line %s: %s", line_number, price_token)
        record.original_price_value = price_token

    return record
