"""Write rendered validation reports to disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from pricing_validation.config import REPORT_FORMATS
from pricing_validation.validation.models import ValidationReport


logger = logging.getLogger(__name__)

REPORT_SUFFIXES = {"text": ".txt", "markdown": ".md", "json": ".json"}


def render_report(report: ValidationReport, fmt: str = "text") -> str:
    """Render a report in one of ``text``, ``markdown`` or ``json``.

    Raises:
        ValueError: If the format is unknown.
    """
    if fmt == "text":
        return report.to_text()
    if fmt == "markdown":
        return report.to_markdown()
    if fmt == "json":
        return report.to_json()
    raise ValueError(f"Unsupported report format '{fmt}'. Valid formats: {', '.join(REPORT_FORMATS)}")


def write_report(report: ValidationReport, path: Union[str, Path], fmt: str = "text") -> Path:
    """Render ``report`` and write it to ``path``, creating parent directories.

    Returns:
        The written path.
    """
    content = render_report(report, fmt)
    report_path = Path(path)
    report_path.parent.mkdir(parents=True, exist_ok=True)
    with open(report_path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.info("Report generated successfully: %s", report_path)
    return report_path


def default_report_path(report_dir: Path, stem: str, fmt: str) -> Path:
    """``<report_dir>/<stem>_validation<suffix>`` for the given format."""
    return Path(report_dir) / f"{stem}_validation{REPORT_SUFFIXES[fmt]}"
