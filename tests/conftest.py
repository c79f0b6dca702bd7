"""Shared pytest fixtures for pricing validation tests."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable, List, Optional

import pytest

from pricing_validation.store import RecordStore
from pricing_validation.validation.models import PricingRecord

CSV_HEADER = "instrument_guid,trade_date,price,exchange,product_type"


def make_record(
    guid: Optional[str] = "1001",
    trade_date: Optional[date] = date(2024, 1, 15),
    price: Optional[float] = 101.25,
    exchange: Optional[str] = "CME",
    product_type: Optional[str] = "FUT",
    original_price_value: Optional[str] = None,
) -> PricingRecord:
    """Build a raw record; defaults describe a fully valid record."""
    return PricingRecord(
        instrument_guid=guid,
        trade_date=trade_date,
        price=price,
        exchange=exchange,
        product_type=product_type,
        original_price_value=original_price_value,
    )


@pytest.fixture
def record_factory() -> Callable[..., PricingRecord]:
    """Provides the record factory to tests that take it as a fixture."""
    return make_record


@pytest.fixture
def write_csv(tmp_path) -> Callable[..., Path]:
    """Write CSV rows (header included by default) to a temp file."""

    def _write(rows: List[str], name: str = "pricing.csv", header: bool = True) -> Path:
        path = tmp_path / name
        lines = ([CSV_HEADER] if header else []) + rows
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def mixed_store() -> RecordStore:
    """A store holding a valid record, a duplicate, a blank GUID and an invalid exchange.

    Storage order:
        0: 1001 valid
        1: 1002 valid
        2: 1001 duplicate of index 0
        3: blank GUID
        4: 1003 invalid exchange
    """
    store = RecordStore()
    store.load(
        [
            make_record("1001"),
            make_record("1002", price=55.5, exchange="NYMEX"),
            make_record("1001", trade_date=date(2024, 1, 16)),
            make_record(None, exchange="CBOT", product_type="OPT"),
            make_record("1003", exchange="LSE"),
        ]
    )
    return store
