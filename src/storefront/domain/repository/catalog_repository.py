"""Abstract read access to products and their variants.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.catalog import CatalogRow, ProductFilters
from storefront.domain.model.product import Product
from storefront.domain.model.variant import Variant


class CatalogRepository(ABC):

    @abstractmethod
    def find_listing_rows(self, filters: ProductFilters) -> list[CatalogRow]:
        """Run the product x variant join for a listing.

        Returns one row per (active product, active variant with stock > 0)
        pair that passes *filters*.  Rows are NOT deduplicated.
        """

    @abstractmethod
    def get_product(self, product_id: int) -> Product | None:
        """Return a product by id whether or not it is active."""

    @abstractmethod
    def list_variants(self, product_id: int) -> list[Variant]:
        """Every active variant of a product, in or out of stock."""
