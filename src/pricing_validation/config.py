"""Application settings loaded from YAML.

Settings file layout (all keys optional)::

    data_file: data/pricing.csv
    report_dir: reports
    report_format: text        # text | markdown | json
    mcp_host: 127.0.0.1
    mcp_port: 8765
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

DEFAULT_SETTINGS_PATH = Path("config/settings.yaml")

REPORT_FORMATS = ("text", "markdown", "json")


@dataclass(frozen=True)
class Settings:
    """Runtime settings shared by the CLI and the MCP server."""

    data_file: Optional[Path] = None
    report_dir: Path = Path("reports")
    report_format: str = "text"
    mcp_host: str = "127.0.0.1"
    mcp_port: int = 8765


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from a YAML file.

    A missing file yields the defaults, so the tools run without any
    configuration.

    Args:
        path: Settings file; defaults to ``config/settings.yaml``.

    Returns:
        Parsed Settings.

    Raises:
        ValueError: If the file is not valid YAML, is not a mapping, or holds
            an unsupported report format or port.
    """
    settings_path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    if not settings_path.exists():
        return Settings()

    try:
        with settings_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse settings file {settings_path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {settings_path} must contain a mapping")

    report_format = str(data.get("report_format", "text")).lower()
    if report_format not in REPORT_FORMATS:
        raise ValueError(
            f"Unsupported report_format '{report_format}'. "
            f"Valid formats: {', '.join(REPORT_FORMATS)}"
        )
    try:
        mcp_port = int(data.get("mcp_port", 8765))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid mcp_port in {settings_path}: {data.get('mcp_port')}") from e

    data_file = data.get("data_file")
    return Settings(
        data_file=Path(data_file) if data_file else None,
        report_dir=Path(data.get("report_dir") or "reports"),
        report_format=report_format,
        mcp_host=str(data.get("mcp_host") or "127.0.0.1"),
        mcp_port=mcp_port,
    )


__all__ = ["Settings", "load_settings", "DEFAULT_SETTINGS_PATH", "REPORT_FORMATS"]
