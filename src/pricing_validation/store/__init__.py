"""In-memory record store and its operation result types."""

from .record_store import RecordRef, RecordStore
from .results import Lookup, OperationResult

__all__ = ["RecordRef", "RecordStore", "Lookup", "OperationResult"]
