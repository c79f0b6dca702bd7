"""Tests for the PriceCheck validation.

This module verifies that `PriceCheck` distinguishes missing, unparseable,
negative and zero prices, and accepts any strictly positive price.
"""

import pytest

from pricing_validation.core.enums import ViolationKind
from pricing_validation.validation.checks.price import PriceCheck


@pytest.mark.parametrize("price", [0.01, 1.0, 101.25, 1e9])
def test_positive_price_passes(record_factory, price):
    """Test that any strictly positive price yields no violation."""
    assert PriceCheck().validate(record_factory(price=price)) == []


def test_missing_price(record_factory):
    """Test that an absent price without a source token is reported as missing."""
    violations = PriceCheck().validate(record_factory(price=None))

    assert [v.kind for v in violations] == [ViolationKind.MISSING_PRICE]
    assert violations[0].message == "Missing price value"


def test_unparseable_price_quotes_token(record_factory):
    """Test that a rejected source token is quoted instead of reported missing."""
    record = record_factory(price=None, original_price_value="abc")
    violations = PriceCheck().validate(record)

    assert [v.kind for v in violations] == [ViolationKind.INVALID_PRICE_FORMAT]
    assert violations[0].message == "Invalid price format: abc"


def test_negative_price(record_factory):
    """Test that a negative price is flagged."""
    violations = PriceCheck().validate(record_factory(price=-5.0))
    assert [v.message for v in violations] == ["Negative price"]


def test_zero_price(record_factory):
    """Test that a zero price is flagged separately from negative prices."""
    violations = PriceCheck().validate(record_factory(price=0.0))
    assert [v.message for v in violations] == ["Zero price"]


def test_check_id():
    assert PriceCheck.check_id == "price"
