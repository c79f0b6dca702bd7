"""Tests for the validation configuration constants and phrase lookup."""

import pytest

from pricing_validation.core.enums import ViolationKind
from pricing_validation.validation.config import (
    BREAKDOWN_LABELS,
    VALID_EXCHANGES,
    VALID_PRODUCT_TYPES,
    VIOLATION_PHRASES,
    get_phrase,
)


def test_whitelists():
    assert VALID_EXCHANGES == {"CME", "NYMEX", "CBOT", "COMEX"}
    assert VALID_PRODUCT_TYPES == {"FUT", "OPT"}


def test_every_kind_has_a_phrase_and_label():
    """Meta-test: no violation kind can be added without a phrase and a label."""
    assert set(VIOLATION_PHRASES) == set(ViolationKind)
    assert {kind for kind, _ in BREAKDOWN_LABELS} == set(ViolationKind)


def test_get_phrase_with_detail():
    assert get_phrase(ViolationKind.INVALID_PRICE_FORMAT, "12,5") == "Invalid price format: 12,5"
    assert get_phrase(ViolationKind.INVALID_PRODUCT_TYPE, "SWAP") == "Invalid product type: SWAP"


def test_get_phrase_without_detail():
    assert get_phrase(ViolationKind.MISSING_TRADE_DATE) == "Missing trade date"


def test_get_phrase_unknown_kind():
    with pytest.raises(ValueError, match="Unknown violation kind"):
        get_phrase("not_a_kind")
