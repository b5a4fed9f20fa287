"""Schema creation and the reference data a fresh store starts with."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Connection, Engine

from storefront.infrastructure.persistence.schema import (
    categories,
    colors,
    metadata,
    products,
    sizes,
    variants,
)

logger = logging.getLogger(__name__)

CATEGORIES = ["Running", "Basketball", "Lifestyle", "Training", "Football"]

COLORS = [
    ("Black", "#000000"),
    ("White", "#FFFFFF"),
    ("Red", "#FF0000"),
    ("Blue", "#0000FF"),
    ("Green", "#008000"),
    ("Gray", "#808080"),
    ("Navy", "#000080"),
    ("Brown", "#8B4513"),
]

# US sizing
SIZES = ["6", "6.5", "7", "7.5", "8", "8.5", "9", "9.5", "10", "10.5", "11", "11.5", "12", "13", "14"]

# (name, category, base price cents, description, [(sku, color, size, stock)])
SAMPLE_PRODUCTS = [
    (
        "Trail Runner",
        "Running",
        12000,
        "Lightweight running shoe with a grippy outsole",
        [
            ("TR-BLK-9", "Black", "9", 25),
            ("TR-BLK-10", "Black", "10", 8),
            ("TR-BLU-10", "Blue", "10", 0),
        ],
    ),
    (
        "Court High",
        "Basketball",
        15000,
        "High-top basketball shoe",
        [
            ("CH-WHT-11", "White", "11", 12),
            ("CH-RED-11", "Red", "11", 4),
        ],
    ),
    (
        "Everyday Classic",
        "Lifestyle",
        9000,
        "Leather sneaker for daily wear",
        [
            ("EC-WHT-8", "White", "8", 30),
            ("EC-BRN-8.5", "Brown", "8.5", 15),
            ("EC-NVY-9", "Navy", "9", 3),
        ],
    ),
]


def create_schema(engine: Engine) -> None:
    metadata.create_all(engine)
    logger.info("store: schema created")


def load_reference_data(conn: Connection) -> None:
    """Insert categories, colors and sizes into an empty store."""
    if conn.execute(select(func.count()).select_from(colors)).scalar_one():
        logger.info("store: reference data already present, skipping")
        return
    conn.execute(insert(categories), [{"category_name": name} for name in CATEGORIES])
    conn.execute(
        insert(colors), [{"color_name": name, "hex_code": hex_code} for name, hex_code in COLORS]
    )
    conn.execute(insert(sizes), [{"size_value": value, "size_type": "US"} for value in SIZES])


def load_sample_catalog(conn: Connection) -> int:
    """Insert the sample products and variants. Returns the variant count."""
    if conn.execute(select(func.count()).select_from(products)).scalar_one():
        logger.info("store: catalog already has products, skipping sample data")
        return 0
    category_ids = dict(conn.execute(select(categories.c.category_name, categories.c.category_id)).all())
    color_ids = dict(conn.execute(select(colors.c.color_name, colors.c.color_id)).all())
    size_ids = dict(conn.execute(select(sizes.c.size_value, sizes.c.size_id)).all())

    count = 0
    for name, category, price_cents, description, variant_rows in SAMPLE_PRODUCTS:
        product_id = conn.execute(
            insert(products).values(
                category_id=category_ids[category],
                product_name=name,
                description=description,
                base_price_cents=price_cents,
                is_active=True,
                created_at=datetime.now(timezone.utc),
            )
        ).inserted_primary_key[0]
        for sku, color, size, stock in variant_rows:
            conn.execute(
                insert(variants).values(
                    product_id=product_id,
                    color_id=color_ids[color],
                    size_id=size_ids[size],
                    sku=sku,
                    unit_price_cents=price_cents,
                    stock_quantity=stock,
                    is_active=True,
                )
            )
            count += 1
    logger.info("store: sample catalog loaded products=%s variants=%s", len(SAMPLE_PRODUCTS), count)
    return count
