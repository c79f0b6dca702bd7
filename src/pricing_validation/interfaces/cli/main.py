import argparse
import importlib
import logging
from pathlib import Path
from typing import Optional

import colorlog

from pricing_validation.config import Settings, load_settings

try:
    from pricing_validation import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover
    _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _resolve_settings(args: argparse.Namespace) -> Optional[Settings]:
    try:
        return load_settings(getattr(args, "config", None))
    except ValueError as e:
        logging.error("Invalid settings: %s", e)
        return None


def _resolve_input(args: argparse.Namespace, settings: Settings) -> Optional[Path]:
    input_arg = getattr(args, "input", None)
    if input_arg:
        return Path(input_arg)
    return settings.data_file


def cmd_validate(args: argparse.Namespace) -> int:
    """Load a pricing file, validate it and print the summary.

    Optionally writes text, Markdown and JSON reports. Each report flag
    accepts a file path; given without a value, the report is written to
    ``<report_dir>/<input stem>_validation.<ext>``.

    Returns:
        0 if every record is valid
        1 if the file could not be loaded
        2 if invalid records were found
    """
    from pricing_validation.store import RecordStore

    writer = importlib.import_module("pricing_validation.reporting.writer")

    settings = _resolve_settings(args)
    if settings is None:
        return 1
    input_path = _resolve_input(args, settings)
    if input_path is None:
        logging.error("--input is required (or set data_file in the settings file)")
        return 1

    store = RecordStore()
    try:
        report = store.load_file(input_path)
    except FileNotFoundError as e:
        logging.error("Input file not found: %s", e)
        return 1
    except ValueError as e:
        logging.error("Failed to load %s: %s", input_path, e)
        return 1

    print(report.to_console_summary())

    requested = [
        ("text", getattr(args, "report", False)),
        ("markdown", getattr(args, "report_md", False)),
        ("json", getattr(args, "report_json", False)),
    ]
    for fmt, target in requested:
        if not target:
            continue
        if target is True:
            report_path = writer.default_report_path(settings.report_dir, input_path.stem, fmt)
        else:
            report_path = Path(target)
        try:
            writer.write_report(report, report_path, fmt)
        except OSError as e:
            logging.error("Failed writing %s report %s: %s", fmt, report_path, e)
            return 1

    if report.has_errors():
        logging.warning(
            "Validation found %d invalid records out of %d.", report.invalid, report.total
        )
        return 2
    logging.info("All %d records passed validation.", report.total)
    return 0


def cmd_shell(args: argparse.Namespace) -> int:
    """Run the interactive correction shell."""
    from pricing_validation.interfaces.cli.shell import PricingShell
    from pricing_validation.store import RecordStore

    settings = _resolve_settings(args)
    if settings is None:
        return 1
    store = RecordStore()
    input_path = _resolve_input(args, settings)
    if input_path is not None:
        try:
            store.load_file(input_path)
        except (FileNotFoundError, ValueError) as e:
            logging.error("Failed to load %s: %s", input_path, e)
            return 1
    shell = PricingShell(store, report_dir=settings.report_dir, report_format=settings.report_format)
    return shell.run()


def cmd_mcp_server(args: argparse.Namespace) -> int:
    try:
        server_mod = importlib.import_module("pricing_validation.interfaces.mcp.server")
    except (ModuleNotFoundError, ImportError, RuntimeError) as e:
        logging.error(
            "MCP server dependencies are missing: %s. Install the 'mcp' package.",
            e,
        )
        return 1

    settings = _resolve_settings(args)
    if settings is None:
        return 1
    input_path = _resolve_input(args, settings)
    data_file = str(input_path) if input_path is not None else None

    try:
        if getattr(args, "port", None) or getattr(args, "http", False):
            host = getattr(args, "host", None) or settings.mcp_host
            port = int(args.port or settings.mcp_port)
            logging.info("Starting HTTP MCP server on %s:%s", host, port)
            server_mod.run_http(data_file, host=host, port=port)
        else:
            logging.info("Starting MCP stdio server")
            server_mod.run(data_file)
    except (FileNotFoundError, ValueError) as e:
        logging.error("Failed to load %s: %s", data_file, e)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pricing-validation",
        description="Pricing data validation, correction and reporting",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument("--warnings-only", action="store_true", help="Only log warnings and errors")
    p.add_argument("--errors-only", action="store_true", help="Only log errors")
    p.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML (defaults to config/settings.yaml)",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {_PACKAGE_VERSION}")
    sub = p.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Validate a pricing CSV and report issues")
    p_validate.add_argument(
        "--input",
        default=None,
        help="Path to the pricing CSV (defaults to data_file from the settings file)",
    )
    p_validate.add_argument(
        "--report",
        nargs="?",
        const=True,
        default=False,
        help="Write the plain-text report. Optionally specify the output file path.",
    )
    p_validate.add_argument(
        "--report-md",
        nargs="?",
        const=True,
        default=False,
        help="Write the Markdown report. Optionally specify the output file path.",
    )
    p_validate.add_argument(
        "--report-json",
        nargs="?",
        const=True,
        default=False,
        help="Write the JSON report. Optionally specify the output file path.",
    )
    p_validate.set_defaults(func=cmd_validate)

    p_shell = sub.add_parser("shell", help="Interactive record review and correction")
    p_shell.add_argument("--input", default=None, help="Pricing CSV to load on start")
    p_shell.set_defaults(func=cmd_shell)

    p_mcp = sub.add_parser("mcp-server", help="Run the MCP server (stdio or HTTP)")
    p_mcp.add_argument("--input", default=None, help="Pricing CSV to load on start")
    p_mcp.add_argument(
        "--port",
        type=int,
        default=None,
        help="If set, run streamable HTTP transport on the given port",
    )
    p_mcp.add_argument(
        "--http",
        action="store_true",
        help="Run streamable HTTP transport on mcp_port from the settings file",
    )
    p_mcp.add_argument(
        "--host",
        default=None,
        help="Host to bind for HTTP transport (defaults to mcp_host from settings)",
    )
    p_mcp.set_defaults(func=cmd_mcp_server)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
