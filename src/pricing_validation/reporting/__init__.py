"""Report rendering and file output."""

from .writer import default_report_path, render_report, write_report

__all__ = ["default_report_path", "render_report", "write_report"]
