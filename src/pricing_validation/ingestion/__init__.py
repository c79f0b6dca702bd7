"""Ingestion of pricing files into raw records."""

from .csv_loader import load_records, parse_row

__all__ = ["load_records", "parse_row"]
