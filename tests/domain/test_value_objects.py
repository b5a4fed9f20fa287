"""Unit tests for Money, Quantity and Pagination value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import MAX_PAGE_SIZE, Money, Pagination, Quantity


class TestMoney:

    def test_create_from_string(self):
        m = Money.of("15.00")
        assert m.amount == Decimal("15.00")
        assert m.currency == "USD"

    def test_rounds_to_cents(self):
        assert Money.of("10.005").amount == Decimal("10.01")

    def test_rejects_negative(self):
        with pytest.raises(ValidationError, match="negative"):
            Money.of("-1.00")

    def test_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten dollars")

    def test_addition(self):
        assert Money.of("10.00") + Money.of("5.50") == Money.of("15.50")

    def test_multiply_by_int(self):
        assert Money.of("15.00") * 3 == Money.of("45.00")

    def test_multiply_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("15.00") * 1.5

    def test_comparisons(self):
        assert Money.of("1.00") < Money.of("2.00")
        assert Money.of("2.00") >= Money.of("2.00")

    def test_cents_round_trip(self):
        assert Money.of("129.99").cents == 12999
        assert Money.of_cents(12999) == Money.of("129.99")

    def test_of_cents_rejects_negative(self):
        with pytest.raises(ValidationError):
            Money.of_cents(-1)

    def test_display(self):
        assert str(Money.of("7")) == "$7.00"

    def test_zero(self):
        assert Money.zero().amount == Decimal("0")


class TestQuantity:

    def test_valid(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="positive"):
            Quantity(-3)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="integer"):
            Quantity(True)

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="integer"):
            Quantity(2.0)


class TestPagination:

    def test_defaults(self):
        p = Pagination()
        assert p.page == 1
        assert p.page_size == 20
        assert p.offset == 0

    def test_offset(self):
        assert Pagination(page=3, page_size=10).offset == 20

    def test_total_pages_rounds_up(self):
        assert Pagination(page_size=10).total_pages(21) == 3
        assert Pagination(page_size=10).total_pages(0) == 0

    def test_page_below_one_rejected(self):
        with pytest.raises(ValidationError):
            Pagination(page=0)

    def test_page_size_capped(self):
        with pytest.raises(ValidationError):
            Pagination(page_size=MAX_PAGE_SIZE + 1)
