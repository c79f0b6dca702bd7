"""Tests for the MCP server tools.

Tools are plain async functions once registered, so they are exercised with
``asyncio.run`` against a store swapped in per test.
"""

from __future__ import annotations

import asyncio

import pytest

pytest.importorskip("mcp")

from pricing_validation.interfaces.mcp import server  # noqa: E402


@pytest.fixture
def store(mixed_store):
    """Install the mixed store behind the tools and restore the original afterwards."""
    previous = server.get_store()
    server.set_store(mixed_store)
    yield mixed_store
    server.set_store(previous)


def _call(tool, **kwargs):
    return asyncio.run(tool(**kwargs))


class TestReadTools:
    """Tests for load_data, get_report, list_records and get_record."""

    def test_load_data(self, store, write_csv):
        path = write_csv(["1,2024-01-15,10,CME,FUT", "1,2024-01-15,10,CME,FUT"])

        result = _call(server.load_data, file_path=str(path))

        assert result["status"] == "ok"
        assert result["report"]["total_records"] == 2
        assert result["report"]["duplicate_records"] == 1
        assert len(store) == 2

    def test_load_data_error(self, store, tmp_path):
        result = _call(server.load_data, file_path=str(tmp_path / "missing.csv"))

        assert result["status"] == "error"
        assert len(store) == 5

    def test_get_report(self, store):
        result = _call(server.get_report)

        assert result["status"] == "ok"
        assert result["summary"]["invalid_records"] == 2
        assert "all_records" not in result

    def test_get_report_with_records(self, store):
        result = _call(server.get_report, include_records=True)
        assert len(result["all_records"]) == 5

    def test_list_records_storage_order(self, store):
        result = _call(server.list_records)

        assert result["count"] == 5
        assert [r["index"] for r in result["records"]] == [0, 1, 2, 3, 4]

    def test_list_records_display_order_keeps_storage_index(self, store):
        result = _call(server.list_records, sorted_for_display=True)

        assert [r["index"] for r in result["records"]] == [0, 2, 1, 3, 4]
        assert [r["instrument_guid"] for r in result["records"]] == [
            "1001", "1001", "1002", "", "1003",
        ]

    def test_get_record_unique_guid(self, store):
        result = _call(server.get_record, guid="1002")

        assert result["status"] == "ok"
        assert result["record"]["index"] == 1
        assert result["record"]["status"] == "VALID"

    def test_get_record_ambiguous(self, store):
        result = _call(server.get_record, guid="1001")

        assert result["status"] == "ambiguous"
        assert result["count"] == 2
        assert [r["index"] for r in result["records"]] == [0, 2]

    def test_get_record_by_index_disambiguates(self, store):
        result = _call(server.get_record, guid="1001", index=2)

        assert result["status"] == "ok"
        assert result["record"]["error"] == "Duplicate GUID (primary key violation)"

    def test_get_record_blank_guid(self, store):
        result = _call(server.get_record, guid="")
        assert result["record"]["index"] == 3

    def test_get_record_not_found(self, store):
        assert _call(server.get_record, guid="9999")["status"] == "not_found"
        assert _call(server.get_record, index=99)["status"] == "not_found"


class TestIndexGuard:
    """Tests for the index/GUID consistency guard."""

    def test_mismatch_rejected(self, store):
        result = _call(server.update_record, guid="1002", index=0, price=5.0)

        assert result["status"] == "rejected"
        assert "GUID mismatch" in result["message"]
        assert store.get_by_index(0).price == 101.25

    def test_non_blank_guid_against_blank_record_rejected(self, store):
        result = _call(server.delete_record, guid="1001", index=3)

        assert result["status"] == "rejected"
        assert len(store) == 5

    def test_blank_guid_addresses_index_alone(self, store):
        result = _call(server.get_record, guid="", index=4)

        assert result["status"] == "ok"
        assert result["record"]["instrument_guid"] == "1003"


class TestMutationTools:
    """Tests for update, correct, delete and create."""

    def test_update_record(self, store):
        result = _call(server.update_record, guid="1003", exchange="CME", trade_date="2024-03-01")

        assert result["status"] == "ok"
        assert result["record"]["status"] == "VALID"
        assert result["record"]["trade_date"] == "2024-03-01"

    def test_update_record_bad_date(self, store):
        result = _call(server.update_record, guid="1003", trade_date="03/01/2024")

        assert result["status"] == "error"
        assert store.get_by_index(4).exchange == "LSE"

    def test_update_record_zero_price(self, store):
        result = _call(server.update_record, guid="1002", price=0.0)

        assert result["status"] == "rejected"
        assert result["message"] == "Price must be greater than zero"

    def test_update_ambiguous_guid_writes_nothing(self, store):
        result = _call(server.update_record, guid="1001", price=3.0)

        assert result["status"] == "ambiguous"
        assert store.get_by_index(0).price == 101.25
        assert store.get_by_index(2).price == 101.25

    def test_correct_record(self, store):
        result = _call(server.correct_record, guid="1001", index=2, new_guid="2001")

        assert result["status"] == "ok"
        assert result["record"]["instrument_guid"] == "2001"
        assert result["record"]["status"] == "VALID"

    def test_correct_record_collision(self, store):
        result = _call(server.correct_record, guid="1003", new_guid="1002")

        assert result["status"] == "rejected"
        assert result["message"] == "GUID 1002 already exists in another record"

    def test_delete_record(self, store):
        result = _call(server.delete_record, guid="1002")

        assert result["status"] == "ok"
        assert "moved down" in result["index_note"]
        assert len(store) == 4

    def test_create_record(self, store):
        result = _call(
            server.create_record,
            instrument_guid="5000",
            trade_date="2024-02-01",
            price=12.5,
            exchange="COMEX",
            product_type="OPT",
        )

        assert result["status"] == "ok"
        assert result["record"]["index"] == 5
        assert result["record"]["status"] == "VALID"

    def test_create_record_rejects_negative_price(self, store):
        result = _call(server.create_record, instrument_guid="5000", price=-1.0)

        assert result["status"] == "rejected"
        assert len(store) == 5


def test_report_resources(store):
    assert asyncio.run(server.resource_report_markdown()).startswith("# Pricing Data Validation Report")
    assert "ALL RECORDS" in asyncio.run(server.resource_report_text())
