"""Domain service: Catalog Aggregator.

Turns the row-per-variant result of the catalog join into product-level
listings.  Order of operations matters:

  1. filter at row level (done by the repository query)
  2. group rows by product and roll up their variants
  3. sort the grouped products
  4. paginate the grouped list

Paginating before grouping would page over variant rows, so one product
with many matching variants could fill a page and the total would count
rows instead of products.
"""

from __future__ import annotations

from collections.abc import Iterable

from storefront.domain.model.catalog import (
    CatalogRow,
    PriceRange,
    ProductListing,
    ProductPage,
    SortSpec,
    StockRollup,
)
from storefront.domain.model.product import Color, Product, Size
from storefront.domain.model.value_objects import Pagination
from storefront.domain.model.variant import Variant


class CatalogAggregator:

    def build_page(
        self,
        rows: Iterable[CatalogRow],
        pagination: Pagination,
        sort: SortSpec,
    ) -> ProductPage:
        listings = self.sort(self.group(rows), sort)
        window = listings[pagination.offset : pagination.offset + pagination.page_size]
        return ProductPage(
            items=window,
            total=len(listings),
            page=pagination.page,
            page_size=pagination.page_size,
            total_pages=pagination.total_pages(len(listings)),
        )

    def group(self, rows: Iterable[CatalogRow]) -> list[ProductListing]:
        """Deduplicate rows by product, keeping first-seen product order."""
        products: dict[int, Product] = {}
        variants: dict[int, dict[int, Variant]] = {}
        for row in rows:
            product_id = row.product.id
            if product_id not in products:
                products[product_id] = row.product
                variants[product_id] = {}
            # a variant can appear twice when the join fans out
            variants[product_id].setdefault(row.variant.id, row.variant)

        return [
            self.listing(product, list(variants[product_id].values()))
            for product_id, product in products.items()
        ]

    def listing(self, product: Product, variants: list[Variant]) -> ProductListing:
        return ProductListing(
            product=product,
            variants=tuple(variants),
            stock=rollup(variants),
        )

    def sort(self, listings: list[ProductListing], sort: SortSpec) -> list[ProductListing]:
        key = _SORT_KEYS[sort.canonical_field]
        # ties keep a stable, id-based order in both directions
        ordered = sorted(listings, key=lambda item: item.product.id)
        return sorted(ordered, key=key, reverse=sort.descending)


def rollup(variants: list[Variant]) -> StockRollup:
    """Stock and facet summary across a product's variants."""
    colors: dict[int, Color] = {}
    sizes: dict[int, Size] = {}
    for variant in variants:
        if variant.color is not None:
            colors.setdefault(variant.color.id, variant.color)
        if variant.size is not None:
            sizes.setdefault(variant.size.id, variant.size)

    prices = [variant.unit_price for variant in variants]
    return StockRollup(
        total_stock=sum(variant.stock_quantity for variant in variants),
        variant_count=len(variants),
        available_colors=tuple(sorted(colors.values(), key=lambda c: c.id)),
        available_sizes=tuple(
            sorted(sizes.values(), key=lambda s: (s.numeric_value, s.value))
        ),
        price_range=PriceRange(low=min(prices), high=max(prices)) if prices else None,
    )


def _lowest_price(item: ProductListing):
    if item.stock.price_range is None:
        return item.product.base_price.amount
    return item.stock.price_range.low.amount


_SORT_KEYS = {
    "name": lambda item: item.product.name.lower(),
    "base_price": lambda item: item.product.base_price.amount,
    "created_at": lambda item: item.product.created_at,
    "lowest_price": _lowest_price,
    "total_stock": lambda item: item.stock.total_stock,
}
