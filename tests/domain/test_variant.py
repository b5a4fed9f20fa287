"""Unit tests for the Variant snapshot and stock answer types."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Size
from storefront.domain.model.variant import StockCheck, StockShortfall
from tests.fakes import make_product, make_variant


class TestVariant:

    def test_in_stock(self):
        assert make_variant(stock=1).in_stock
        assert not make_variant(stock=0).in_stock
        assert not make_variant(stock=5, active=False).in_stock

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            make_variant(stock=-1)

    def test_non_integer_stock_rejected(self):
        with pytest.raises(ValidationError, match="integer"):
            make_variant(stock=1.5)

    def test_blank_sku_rejected(self):
        with pytest.raises(ValidationError, match="SKU"):
            make_variant(sku=" ")


def test_product_requires_name():
    with pytest.raises(ValidationError):
        make_product(name="")


def test_size_numeric_value():
    assert Size(1, "10.5").numeric_value == 10.5
    assert Size(2, "XL").numeric_value == float("inf")


def test_shortfall():
    assert StockShortfall(variant_id=1, available=2, requested=3).shortfall == 1


def test_stock_check():
    ok = StockCheck(variant_id=1, current_stock=5, requested=5)
    short = StockCheck(variant_id=1, current_stock=2, requested=5)
    assert ok.available and ok.shortfall == 0
    assert not short.available and short.shortfall == 3
