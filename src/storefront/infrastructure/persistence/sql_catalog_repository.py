"""SQL implementation of CatalogRepository."""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.engine import Connection

from storefront.domain.model.catalog import CatalogRow, ProductFilters
from storefront.domain.model.product import Product
from storefront.domain.model.variant import Variant
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.infrastructure.persistence.rows import (
    PRODUCT_COLUMNS,
    VARIANT_COLUMNS,
    product_from_row,
    select_variants,
    variant_from_row,
)
from storefront.infrastructure.persistence.schema import colors, products, sizes, variants


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SqlCatalogRepository(CatalogRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def find_listing_rows(self, filters: ProductFilters) -> list[CatalogRow]:
        joined = (
            products.join(variants, variants.c.product_id == products.c.product_id)
            .outerjoin(colors, colors.c.color_id == variants.c.color_id)
            .outerjoin(sizes, sizes.c.size_id == variants.c.size_id)
        )
        stmt = (
            select(*PRODUCT_COLUMNS, *VARIANT_COLUMNS)
            .select_from(joined)
            .where(
                products.c.is_active.is_(True),
                variants.c.is_active.is_(True),
                variants.c.stock_quantity > 0,
            )
        )

        # product-level filters
        if filters.category_id is not None:
            stmt = stmt.where(products.c.category_id == filters.category_id)
        if filters.min_price is not None:
            stmt = stmt.where(products.c.base_price_cents >= filters.min_price.cents)
        if filters.max_price is not None:
            stmt = stmt.where(products.c.base_price_cents <= filters.max_price.cents)
        if filters.search_text:
            pattern = _like_pattern(filters.search_text.strip())
            stmt = stmt.where(
                or_(
                    products.c.product_name.ilike(pattern, escape="\\"),
                    products.c.description.ilike(pattern, escape="\\"),
                )
            )

        # variant-level facets
        if filters.color_ids:
            stmt = stmt.where(variants.c.color_id.in_(sorted(filters.color_ids)))
        if filters.size_ids:
            stmt = stmt.where(variants.c.size_id.in_(sorted(filters.size_ids)))

        stmt = stmt.order_by(
            products.c.product_id,
            variants.c.color_id,
            variants.c.size_id,
            variants.c.variant_id,
        )
        return [
            CatalogRow(product=product_from_row(row), variant=variant_from_row(row))
            for row in self._conn.execute(stmt)
        ]

    def get_product(self, product_id: int) -> Product | None:
        row = self._conn.execute(
            select(*PRODUCT_COLUMNS).where(products.c.product_id == product_id)
        ).first()
        return product_from_row(row) if row is not None else None

    def list_variants(self, product_id: int) -> list[Variant]:
        rows = self._conn.execute(
            select_variants()
            .where(variants.c.product_id == product_id, variants.c.is_active.is_(True))
            .order_by(variants.c.color_id, variants.c.size_id, variants.c.variant_id)
        )
        return [variant_from_row(row) for row in rows]
