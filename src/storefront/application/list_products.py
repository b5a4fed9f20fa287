"""Application service: product listing and product detail (queries).

Listings only see active products with at least one active, in-stock
variant matching the filters.  Stale stock numbers in a listing are
acceptable; nothing here reserves anything.
"""

from __future__ import annotations

from storefront.application.dto import (
    ProductPageDTO,
    ProductSummaryDTO,
    listing_to_dto,
    page_to_dto,
)
from storefront.domain.exceptions import ProductNotFound
from storefront.domain.model.catalog import ProductFilters, SortSpec
from storefront.domain.model.value_objects import Pagination
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.catalog_aggregator import CatalogAggregator


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork, aggregator: CatalogAggregator | None = None) -> None:
        self._uow = uow
        self._aggregator = aggregator or CatalogAggregator()

    def handle(
        self,
        filters: ProductFilters | None = None,
        pagination: Pagination | None = None,
        sort: SortSpec | None = None,
    ) -> ProductPageDTO:
        with self._uow as uow:
            rows = uow.catalog.find_listing_rows(filters or ProductFilters())

        page = self._aggregator.build_page(rows, pagination or Pagination(), sort or SortSpec())
        return page_to_dto(page)


class ShowProductHandler:

    def __init__(self, uow: UnitOfWork, aggregator: CatalogAggregator | None = None) -> None:
        self._uow = uow
        self._aggregator = aggregator or CatalogAggregator()

    def handle(self, product_id: int) -> ProductSummaryDTO:
        """Product with every active variant (in stock or not) and its rollup."""
        with self._uow as uow:
            product = uow.catalog.get_product(product_id)
            if product is None:
                raise ProductNotFound(product_id)
            variants = uow.catalog.list_variants(product_id)

        return listing_to_dto(self._aggregator.listing(product, variants))
