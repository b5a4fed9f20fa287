"""Column sets and row -> domain mapping shared by the SQL repositories."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Select, select

from storefront.domain.model.product import Color, Product, Size
from storefront.domain.model.value_objects import Money
from storefront.domain.model.variant import Variant
from storefront.infrastructure.persistence.schema import colors, products, sizes, variants

PRODUCT_COLUMNS = (
    products.c.product_id,
    products.c.category_id,
    products.c.product_name,
    products.c.description,
    products.c.base_price_cents,
    products.c.is_active.label("product_active"),
    products.c.created_at,
)

VARIANT_COLUMNS = (
    variants.c.variant_id,
    variants.c.product_id.label("variant_product_id"),
    variants.c.color_id,
    variants.c.size_id,
    variants.c.sku,
    variants.c.unit_price_cents,
    variants.c.stock_quantity,
    variants.c.is_active.label("variant_active"),
    colors.c.color_name,
    colors.c.hex_code,
    sizes.c.size_value,
    sizes.c.size_type,
)


def select_variants() -> Select:
    """Variants with their color and size labels."""
    return select(*VARIANT_COLUMNS).select_from(
        variants.outerjoin(colors, colors.c.color_id == variants.c.color_id).outerjoin(
            sizes, sizes.c.size_id == variants.c.size_id
        )
    )


def as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands timestamps back without tzinfo
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def variant_from_row(row) -> Variant:
    m = row._mapping
    return Variant(
        id=m["variant_id"],
        product_id=m["variant_product_id"],
        color_id=m["color_id"],
        size_id=m["size_id"],
        sku=m["sku"],
        unit_price=Money.of_cents(m["unit_price_cents"]),
        stock_quantity=m["stock_quantity"],
        active=bool(m["variant_active"]),
        color=(
            Color(id=m["color_id"], name=m["color_name"], hex_code=m["hex_code"])
            if m["color_name"] is not None
            else None
        ),
        size=(
            Size(id=m["size_id"], value=m["size_value"], size_type=m["size_type"])
            if m["size_value"] is not None
            else None
        ),
    )


def product_from_row(row) -> Product:
    m = row._mapping
    return Product(
        id=m["product_id"],
        name=m["product_name"],
        base_price=Money.of_cents(m["base_price_cents"]),
        category_id=m["category_id"],
        description=m["description"] or "",
        active=bool(m["product_active"]),
        created_at=as_utc(m["created_at"]),
    )
