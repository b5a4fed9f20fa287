"""Tests for the SQL stock primitives against SQLite."""

import pytest
from sqlalchemy import update

from storefront.domain.exceptions import ValidationError, VariantNotFound
from storefront.infrastructure.persistence.schema import variants


def _stock(uow_factory, variant_id):
    with uow_factory() as uow:
        return uow.variants.read(variant_id)


class TestConditionalDecrement:

    def test_decrements_when_enough(self, uow_factory, skus):
        with uow_factory() as uow:
            result = uow.variants.conditional_decrement(skus["TR-BLK-10"], 3)
            uow.commit()
        assert result.ok
        assert result.new_quantity == 5
        assert _stock(uow_factory, skus["TR-BLK-10"]) == 5

    def test_exact_amount_reaches_zero(self, uow_factory, skus):
        with uow_factory() as uow:
            assert uow.variants.conditional_decrement(skus["EC-NVY-9"], 3).new_quantity == 0
            uow.commit()

    def test_refuses_when_short(self, uow_factory, skus):
        with uow_factory() as uow:
            result = uow.variants.conditional_decrement(skus["CH-RED-11"], 5)
            uow.commit()
        assert not result.ok
        assert result.new_quantity == 4
        assert _stock(uow_factory, skus["CH-RED-11"]) == 4

    def test_unknown_variant(self, uow_factory, skus):
        with uow_factory() as uow:
            with pytest.raises(VariantNotFound):
                uow.variants.conditional_decrement(999, 1)

    def test_inactive_variant(self, engine, uow_factory, skus):
        with engine.begin() as conn:
            conn.execute(
                update(variants)
                .where(variants.c.variant_id == skus["EC-WHT-8"])
                .values(is_active=False)
            )
        with uow_factory() as uow:
            with pytest.raises(VariantNotFound):
                uow.variants.conditional_decrement(skus["EC-WHT-8"], 1)

    def test_non_positive_amount(self, uow_factory, skus):
        with uow_factory() as uow:
            with pytest.raises(ValidationError):
                uow.variants.conditional_decrement(skus["TR-BLK-9"], 0)

    def test_uncommitted_change_rolls_back(self, uow_factory, skus):
        with uow_factory() as uow:
            uow.variants.conditional_decrement(skus["TR-BLK-9"], 10)
        assert _stock(uow_factory, skus["TR-BLK-9"]) == 25


class TestOtherPrimitives:

    def test_increment(self, uow_factory, skus):
        with uow_factory() as uow:
            assert uow.variants.increment(skus["TR-BLU-10"], 6) == 6
            uow.commit()
        assert _stock(uow_factory, skus["TR-BLU-10"]) == 6

    def test_increment_unknown(self, uow_factory, skus):
        with uow_factory() as uow:
            with pytest.raises(VariantNotFound):
                uow.variants.increment(999, 1)

    def test_set_absolute(self, uow_factory, skus):
        with uow_factory() as uow:
            assert uow.variants.set_absolute(skus["TR-BLK-9"], 2) == 2
            uow.commit()
        assert _stock(uow_factory, skus["TR-BLK-9"]) == 2

    def test_set_absolute_negative(self, uow_factory, skus):
        with uow_factory() as uow:
            with pytest.raises(ValidationError):
                uow.variants.set_absolute(skus["TR-BLK-9"], -1)


class TestLookups:

    def test_get_by_sku_carries_labels(self, uow_factory, skus):
        with uow_factory() as uow:
            variant = uow.variants.get_by_sku("EC-BRN-8.5")
        assert variant.id == skus["EC-BRN-8.5"]
        assert variant.color.name == "Brown"
        assert variant.size.value == "8.5"
        assert str(variant.unit_price) == "$90.00"

    def test_get_missing(self, uow_factory, skus):
        with uow_factory() as uow:
            assert uow.variants.get(999) is None
            assert uow.variants.get_by_sku("NOPE") is None

    def test_find_low_stock(self, uow_factory, skus):
        with uow_factory() as uow:
            low = uow.variants.find_low_stock(4)
        assert [v.sku for v in low] == ["TR-BLU-10", "EC-NVY-9", "CH-RED-11"]
