"""Pricing Validation Tools: record store, validation engine and quality reports.

The package loads tabular pricing records (instrument GUID, trade date, price,
exchange, product type), validates them field by field and across records
(GUID is the primary key), lets an operator correct flagged records, and
renders an aggregated quality report.
"""

__all__ = [
    "__version__",
]

__version__ = "0.3.0"
