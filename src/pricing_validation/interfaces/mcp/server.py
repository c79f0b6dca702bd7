"""
MCP server exposing the pricing record store as tools.

Tools:
 - load_data
 - get_report
 - list_records
 - get_record
 - update_record
 - correct_record
 - delete_record
 - create_record

Every tool returns a JSON-able dict whose ``status`` is one of
``ok``, ``not_found``, ``rejected``, ``ambiguous`` or ``error``.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

try:
    from mcp.server.fastmcp import FastMCP
except Exception as exc:
    raise RuntimeError(
        "The 'mcp' package is required for the MCP server. Install with: pip install mcp"
    ) from exc

from pricing_validation.core.enums import Outcome
from pricing_validation.core.utils import normalize_guid, parse_trade_date
from pricing_validation.store import Lookup, OperationResult, RecordStore
from pricing_validation.validation.models import PricingRecord, RecordPatch


_SERVER = FastMCP("pricing-validation-tools")
_STORE = RecordStore()

# Configure logging for MCP server
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr)  # MCP uses stdout for protocol
    ],
)
logger = logging.getLogger(__name__)


def get_store() -> RecordStore:
    return _STORE


def set_store(store: RecordStore) -> None:
    """Replace the store backing the tools (used on startup and in tests)."""
    global _STORE
    _STORE = store


def _record_payload(record: PricingRecord, index: Optional[int]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"index": index}
    payload.update(record.to_dict())
    return payload


def _result_payload(result: OperationResult) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"status": result.status.value, "message": result.message}
    if result.ok and result.record is not None:
        payload["record"] = _record_payload(result.record, result.index)
        payload["index_note"] = f"Record is at index {result.index}"
    return payload


def _ambiguous_payload(guid: str, lookup: Lookup) -> Dict[str, Any]:
    store = get_store()
    display = normalize_guid(guid) or "(empty)"
    return {
        "status": Outcome.AMBIGUOUS.value,
        "message": f"Multiple records found with GUID: {display}",
        "count": len(lookup.candidates),
        "records": [_record_payload(store.get_by_index(i), i) for i in lookup.candidates],
        "instruction": "Repeat the call with 'index' set to one of the listed indices",
    }


def _target(guid: str, index: Optional[int]) -> tuple[Optional[int], Optional[Dict[str, Any]]]:
    """Resolve ``guid``/``index`` to one storage index, or an error payload.

    With an index, a non-blank ``guid`` must equal the GUID of the record
    there, which guards against editing the wrong record after indices
    shifted. A blank ``guid`` addresses the index alone.
    """
    store = get_store()
    if index is not None:
        lookup = store.resolve(int(index))
        if not lookup.found:
            return None, {"status": Outcome.NOT_FOUND.value, "message": f"Record not found at index: {index}"}
        actual = normalize_guid(lookup.record.instrument_guid)
        wanted = normalize_guid(guid)
        if wanted is not None and actual != wanted:
            return None, {
                "status": Outcome.REJECTED.value,
                "message": (
                    f"GUID mismatch: record at index {index} has GUID '{actual or ''}', "
                    f"but '{guid}' was specified"
                ),
            }
        return lookup.index, None

    lookup = store.resolve(guid)
    if lookup.status == Outcome.NOT_FOUND:
        message = (
            f"Record not found for GUID: {guid}"
            if normalize_guid(guid)
            else "Record not found for empty GUID"
        )
        return None, {"status": Outcome.NOT_FOUND.value, "message": message}
    if lookup.status == Outcome.AMBIGUOUS:
        return None, _ambiguous_payload(guid, lookup)
    return lookup.index, None


def _build_patch(
    *,
    instrument_guid: Optional[str] = None,
    trade_date: Optional[str] = None,
    price: Optional[float] = None,
    exchange: Optional[str] = None,
    product_type: Optional[str] = None,
) -> RecordPatch:
    return RecordPatch(
        instrument_guid=instrument_guid,
        trade_date=parse_trade_date(trade_date),
        price=price,
        exchange=exchange,
        product_type=product_type,
    )


# -------------------------
# MARK: Record Tools
# -------------------------


@_SERVER.tool("load_data")
async def load_data(file_path: str) -> Dict[str, Any]:
    """Load and validate a pricing CSV, replacing all records."""
    try:
        report = get_store().load_file(file_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Error in load_data: %s", e)
        return {"status": "error", "message": str(e)}
    return {"status": Outcome.OK.value, "message": "Data loaded successfully", "report": report.to_dict()["summary"]}


@_SERVER.tool("get_report")
async def get_report(include_records: bool = False) -> Dict[str, Any]:
    """Return the current validation report."""
    data = get_store().report().to_dict()
    if not include_records:
        data.pop("all_records", None)
    data["status"] = Outcome.OK.value
    return data


@_SERVER.tool("list_records")
async def list_records(sorted_for_display: bool = False) -> Dict[str, Any]:
    """List every record with its storage index, in storage or display order."""
    store = get_store()
    if sorted_for_display:
        records = [_record_payload(r, store.index_of(r)) for r in store.get_all_sorted()]
    else:
        records = [_record_payload(r, i) for i, r in enumerate(store.get_all())]
    return {"status": Outcome.OK.value, "count": len(records), "records": records}


@_SERVER.tool("get_record")
async def get_record(guid: str = "", index: Optional[int] = None) -> Dict[str, Any]:
    """Fetch one record by GUID, or by index when the GUID is blank or shared."""
    target, error = _target(guid, index)
    if error is not None:
        return error
    record = get_store().get_by_index(target)
    return {"status": Outcome.OK.value, "record": _record_payload(record, target)}


@_SERVER.tool("update_record")
async def update_record(
    guid: str = "",
    index: Optional[int] = None,
    trade_date: Optional[str] = None,
    price: Optional[float] = None,
    exchange: Optional[str] = None,
    product_type: Optional[str] = None,
) -> Dict[str, Any]:
    """Update the given fields of one record; omitted fields are unchanged."""
    target, error = _target(guid, index)
    if error is not None:
        return error
    try:
        patch = _build_patch(trade_date=trade_date, price=price, exchange=exchange, product_type=product_type)
    except ValueError as e:
        return {"status": "error", "message": str(e)}
    return _result_payload(get_store().update(target, patch))


@_SERVER.tool("correct_record")
async def correct_record(
    guid: str = "",
    index: Optional[int] = None,
    new_guid: Optional[str] = None,
    trade_date: Optional[str] = None,
    price: Optional[float] = None,
    exchange: Optional[str] = None,
    product_type: Optional[str] = None,
) -> Dict[str, Any]:
    """Correct one record, optionally assigning a new unique GUID."""
    target, error = _target(guid, index)
    if error is not None:
        return error
    try:
        patch = _build_patch(
            instrument_guid=new_guid,
            trade_date=trade_date,
            price=price,
            exchange=exchange,
            product_type=product_type,
        )
    except ValueError as e:
        return {"status": "error", "message": str(e)}
    return _result_payload(get_store().correct(target, patch))


@_SERVER.tool("delete_record")
async def delete_record(guid: str = "", index: Optional[int] = None) -> Dict[str, Any]:
    """Delete one record. Later records move down one index."""
    target, error = _target(guid, index)
    if error is not None:
        return error
    result = get_store().delete(target)
    payload = {"status": result.status.value, "message": result.message}
    if result.ok:
        payload["index_note"] = f"Records after index {target} moved down by one"
    return payload


@_SERVER.tool("create_record")
async def create_record(
    instrument_guid: Optional[str] = None,
    trade_date: Optional[str] = None,
    price: Optional[float] = None,
    exchange: Optional[str] = None,
    product_type: Optional[str] = None,
) -> Dict[str, Any]:
    """Append a new record; it is validated like any other."""
    try:
        record = PricingRecord(
            instrument_guid=instrument_guid,
            trade_date=parse_trade_date(trade_date),
            price=price,
            exchange=exchange,
            product_type=product_type,
        )
    except ValueError as e:
        return {"status": "error", "message": str(e)}
    return _result_payload(get_store().create(record))


# -------------------------
# MARK: Report Resources
# -------------------------


@_SERVER.resource(
    "pricing://report/markdown",
    name="Validation Report (Markdown)",
    title="Validation report",
    description="Current validation report of the loaded records as Markdown",
    mime_type="text/markdown",
)
async def resource_report_markdown() -> str:
    return get_store().report().to_markdown()


@_SERVER.resource(
    "pricing://report/text",
    name="Validation Report (Text)",
    title="Validation report, plain text",
    description="Current validation report including the table of all records in display order",
    mime_type="text/plain",
)
async def resource_report_text() -> str:
    return get_store().report().to_text()


# Transport functions
def _preload(data_file: Optional[str]) -> None:
    if data_file:
        logger.info("Loading initial data file: %s", data_file)
        get_store().load_file(Path(data_file))


def run(data_file: Optional[str] = None) -> None:
    """Run MCP server over stdio."""
    _preload(data_file)
    asyncio.run(_SERVER.run_stdio_async())


async def _run_http(host: str, port: int) -> None:
    """Start HTTP server with explicit uvicorn configuration."""
    try:
        import uvicorn
    except ImportError:
        raise RuntimeError("uvicorn is required for HTTP mode: pip install uvicorn")

    app = _SERVER.streamable_http_app()
    config = uvicorn.Config(
        app,
        host=host,
        port=int(port),
        log_level="info",
    )
    server = uvicorn.Server(config)
    await server.serve()


def run_http(data_file: Optional[str] = None, *, host: str = "127.0.0.1", port: int = 8765) -> None:
    """Run MCP server over HTTP."""
    _preload(data_file)
    logger.info("Starting HTTP MCP server on %s:%d", host, port)
    asyncio.run(_run_http(host, port))
