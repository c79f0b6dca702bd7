"""Display ordering for pricing records.

Produces a presentation-only sequence. Records without a GUID stay at their
storage positions; the remaining positions are refilled, in ascending
position order, with the GUID-bearing records sorted numeric-first.
"""

from __future__ import annotations

import re
from functools import cmp_to_key
from typing import List, Optional, Sequence

from pricing_validation.core.utils import is_blank
from .models import PricingRecord


_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# GUIDs outside the signed 32-bit range sort as text
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1


def _as_int(guid: str) -> Optional[int]:
    """Integer value of a GUID that is entirely an optionally signed 32-bit integer."""
    if not _INTEGER_RE.fullmatch(guid):
        return None
    value = int(guid)
    if _INT_MIN <= value <= _INT_MAX:
        return value
    return None


def compare_guids(left: str, right: str) -> int:
    """Three-way GUID comparator.

    Integers compare numerically and sort before non-integers; two
    non-integers compare as strings. Numerically equal GUIDs such as
    "7" and "07" compare equal.

    Examples:
        >>> compare_guids("10", "9")
        1
        >>> compare_guids("abc", "2")
        1
        >>> compare_guids("7", "07")
        0
    """
    left_int, right_int = _as_int(left), _as_int(right)
    if left_int is not None and right_int is not None:
        return (left_int > right_int) - (left_int < right_int)
    if left_int is not None:
        return -1
    if right_int is not None:
        return 1
    return (left > right) - (left < right)


def display_order(records: Sequence[PricingRecord]) -> List[PricingRecord]:
    """Return the records in presentation order without touching storage order.

    Args:
        records: Records in storage order.

    Returns:
        New list of the same length. The sort is stable, so records whose
        GUIDs compare equal keep their relative storage order.

    Examples:
        >>> [r.instrument_guid for r in display_order(records)]
        ['2', '9', None, '10', 'abc']
    """
    ordered = list(records)
    keyed_positions = [i for i, r in enumerate(records) if not is_blank(r.instrument_guid)]
    keyed = sorted(
        (records[i] for i in keyed_positions),
        key=cmp_to_key(lambda a, b: compare_guids(a.instrument_guid, b.instrument_guid)),
    )
    for position, record in zip(keyed_positions, keyed):
        ordered[position] = record
    return ordered
