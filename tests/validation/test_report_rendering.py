"""Tests for ValidationReport renderers: summary, console, text, markdown and JSON."""

import json
from datetime import date

import pytest

from pricing_validation.validation.aggregator import build_report
from pricing_validation.validation.registry import validate_all_records


@pytest.fixture
def report(record_factory):
    """Report over one valid record, a duplicate, a bad price token and a missing GUID."""
    records = [
        record_factory("1001"),
        record_factory("1001", trade_date=date(2024, 1, 16)),
        record_factory("1004", price=None, original_price_value="abc"),
        record_factory(None, exchange="CBOT"),
    ]
    validate_all_records(records)
    return build_report(records)


@pytest.fixture
def clean_report(record_factory):
    records = [record_factory("1"), record_factory("2")]
    validate_all_records(records)
    return build_report(records)


def test_summary(report):
    assert report.summary() == (
        "Validation Summary:\n"
        "  Records: 4 total (1 valid, 3 invalid)\n"
        "  Duplicates: 1\n"
        "  Missing Values: 1"
    )


def test_console_summary_lists_breakdown(report):
    text = report.to_console_summary()

    assert "Error Breakdown:" in text
    assert "❌ Invalid Price Format: 1" in text
    assert "❌ Missing instrument_guid: 1" in text
    assert "❌ Duplicate Records: 1" in text
    assert "Zero Price" not in text


def test_console_summary_all_valid(clean_report):
    assert clean_report.to_console_summary().endswith("✅ All records passed validation!")


def test_text_report_sections(report):
    text = report.to_text()

    assert "Pricing Data Validation Report" in text
    assert "Total Records: 4" in text
    assert "Invalid Records: 3" in text
    assert "INVALID RECORDS DETAILS" in text
    assert "DUPLICATE RECORDS DETAILS" in text
    assert "MISSING VALUES DETAILS" in text
    assert "Missing Instrument GUID Records:" in text
    assert "Error:         Invalid price format: abc" in text
    assert text.rstrip().endswith("=" * 80)
    assert "End of Report" in text


def test_text_report_table_uses_display_order_and_raw_price(report):
    """Test that the ALL RECORDS table sorts by GUID and shows rejected price tokens."""
    text = report.to_text()
    table = text.split("ALL RECORDS")[1]
    rows = [line for line in table.splitlines() if line.startswith(("1001", "1004"))]

    assert rows[0].startswith("1001") and "101.25" in rows[0]
    assert rows[-1].startswith("1004") and "abc" in rows[-1]


def test_text_report_clean_has_no_detail_sections(clean_report):
    text = clean_report.to_text()

    assert "INVALID RECORDS DETAILS" not in text
    assert "MISSING VALUES DETAILS" not in text


def test_markdown_report(report):
    md = report.to_markdown()

    assert md.startswith("# Pricing Data Validation Report")
    assert "## Summary" in md
    assert "## Error Breakdown" in md
    assert "| Invalid Price Format | 1 |" in md
    assert "## ❌ Invalid Records" in md
    assert "## Duplicate GUIDs" in md
    assert "- 1001 - 2024-01-16" in md


def test_markdown_report_clean(clean_report):
    md = clean_report.to_markdown()

    assert "## ✅ All Records Passed" in md
    assert "## Error Breakdown" not in md


def test_json_report(report):
    data = json.loads(report.to_json())

    assert data["summary"] == {
        "total_records": 4,
        "valid_records": 1,
        "invalid_records": 3,
        "duplicate_records": 1,
        "total_missing": 1,
    }
    assert data["counts"]["DUPLICATE_GUID"] == 1
    assert data["duplicate_records"] == ["1001 - 2024-01-16"]
    bad_price = next(r for r in data["invalid_records"] if r["instrument_guid"] == "1004")
    assert bad_price["price"] == "abc"
    assert bad_price["status"] == "INVALID"
    assert bad_price["error"] == "Invalid price format: abc"
