"""Unit tests for grouping, rollup, sorting and paging of catalog rows."""

from datetime import datetime, timezone

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.catalog import CatalogRow, ProductFilters, SortSpec
from storefront.domain.model.value_objects import Money, Pagination
from storefront.domain.service.catalog_aggregator import CatalogAggregator, rollup
from tests.fakes import make_product, make_variant


def _rows(product, *variants):
    return [CatalogRow(product=product, variant=v) for v in variants]


class TestGrouping:

    def test_three_variants_make_one_product(self):
        product = make_product(id=1)
        rows = _rows(
            product,
            make_variant(id=1, color_id=1, size_id=1),
            make_variant(id=2, color_id=2, size_id=1),
            make_variant(id=3, color_id=1, size_id=2),
        )
        page = CatalogAggregator().build_page(rows, Pagination(page_size=1), SortSpec())
        assert page.total == 1
        assert page.total_pages == 1
        assert len(page.items) == 1
        assert page.items[0].stock.variant_count == 3

    def test_duplicate_rows_collapse(self):
        product = make_product(id=1)
        v = make_variant(id=1, stock=4)
        listings = CatalogAggregator().group(_rows(product, v, v))
        assert len(listings) == 1
        assert listings[0].stock.total_stock == 4

    def test_page_counts_products_not_rows(self):
        rows = []
        for pid in range(1, 4):
            product = make_product(id=pid, name=f"Shoe {pid}")
            rows += _rows(
                product,
                make_variant(id=pid * 10, product_id=pid),
                make_variant(id=pid * 10 + 1, product_id=pid, size_id=2),
            )
        page = CatalogAggregator().build_page(
            rows, Pagination(page=2, page_size=2), SortSpec("name", "asc")
        )
        assert page.total == 3
        assert page.total_pages == 2
        assert [item.product.name for item in page.items] == ["Shoe 3"]

    def test_page_past_end_is_empty(self):
        rows = _rows(make_product(id=1), make_variant(id=1))
        page = CatalogAggregator().build_page(rows, Pagination(page=5), SortSpec())
        assert page.items == []
        assert page.total == 1


class TestRollup:

    def test_totals_and_facets(self):
        variants = [
            make_variant(id=1, stock=3, color_id=2, size_id=3, price="110.00"),
            make_variant(id=2, stock=5, color_id=1, size_id=1, price="130.00"),
            make_variant(id=3, stock=2, color_id=2, size_id=2, price="120.00"),
        ]
        stock = rollup(variants)
        assert stock.total_stock == 10
        assert stock.has_stock
        assert [c.name for c in stock.available_colors] == ["Black", "White"]
        assert [s.value for s in stock.available_sizes] == ["9", "10", "10.5"]
        assert str(stock.price_range) == "$110.00 - $130.00"

    def test_single_price(self):
        stock = rollup([make_variant(id=1, price="90.00"), make_variant(id=2, size_id=2, price="90.00")])
        assert str(stock.price_range) == "$90.00"

    def test_no_variants(self):
        stock = rollup([])
        assert stock.total_stock == 0
        assert not stock.has_stock
        assert stock.price_range is None


class TestSorting:

    def _listings(self):
        aggregator = CatalogAggregator()
        a = make_product(id=1, name="bravo", price="50.00",
                         created_at=datetime(2024, 3, 1, tzinfo=timezone.utc))
        b = make_product(id=2, name="Alpha", price="80.00",
                         created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        c = make_product(id=3, name="charlie", price="50.00",
                         created_at=datetime(2024, 2, 1, tzinfo=timezone.utc))
        rows = (
            _rows(a, make_variant(id=1, product_id=1, stock=9, price="45.00"))
            + _rows(b, make_variant(id=2, product_id=2, stock=1, price="70.00"))
            + _rows(c, make_variant(id=3, product_id=3, stock=4, price="40.00"))
        )
        return aggregator, aggregator.group(rows)

    def _ids(self, listings):
        return [item.product.id for item in listings]

    def test_default_is_newest_first(self):
        aggregator, listings = self._listings()
        assert self._ids(aggregator.sort(listings, SortSpec())) == [1, 3, 2]

    def test_name_is_case_insensitive(self):
        aggregator, listings = self._listings()
        assert self._ids(aggregator.sort(listings, SortSpec("name", "asc"))) == [2, 1, 3]

    def test_price_ties_keep_id_order(self):
        aggregator, listings = self._listings()
        assert self._ids(aggregator.sort(listings, SortSpec("price", "asc"))) == [1, 3, 2]

    def test_lowest_price_uses_variants(self):
        aggregator, listings = self._listings()
        assert self._ids(aggregator.sort(listings, SortSpec("lowest_price", "asc"))) == [3, 1, 2]

    def test_total_stock_desc(self):
        aggregator, listings = self._listings()
        assert self._ids(aggregator.sort(listings, SortSpec("total_stock", "desc"))) == [1, 3, 2]


class TestCatalogInputs:

    def test_unknown_sort_field(self):
        with pytest.raises(ValidationError, match="Cannot sort"):
            SortSpec("popularity")

    def test_bad_direction(self):
        with pytest.raises(ValidationError):
            SortSpec("name", "sideways")

    def test_min_above_max(self):
        with pytest.raises(ValidationError, match="exceeds"):
            ProductFilters(min_price=Money.of("100"), max_price=Money.of("50"))

    def test_blank_search_ignored(self):
        assert ProductFilters(search_text="   ").search_text is None
