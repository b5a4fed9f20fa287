"""Table definitions for the relational store.

Money columns hold integer cents.  There are deliberately no triggers on
``order_items``: stock changes only through the application's
conditional updates on ``variants.stock_quantity``.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

categories = Table(
    "categories",
    metadata,
    Column("category_id", Integer, primary_key=True, autoincrement=True),
    Column("category_name", String(100), nullable=False, unique=True),
)

colors = Table(
    "colors",
    metadata,
    Column("color_id", Integer, primary_key=True, autoincrement=True),
    Column("color_name", String(50), nullable=False, unique=True),
    Column("hex_code", String(7)),
)

sizes = Table(
    "sizes",
    metadata,
    Column("size_id", Integer, primary_key=True, autoincrement=True),
    Column("size_value", String(10), nullable=False),
    Column("size_type", String(20)),
)

products = Table(
    "products",
    metadata,
    Column("product_id", Integer, primary_key=True, autoincrement=True),
    Column("category_id", Integer, ForeignKey("categories.category_id"), nullable=False),
    Column("product_name", String(255), nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("base_price_cents", Integer, nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("base_price_cents >= 0", name="ck_products_price"),
)

variants = Table(
    "variants",
    metadata,
    Column("variant_id", Integer, primary_key=True, autoincrement=True),
    Column("product_id", Integer, ForeignKey("products.product_id"), nullable=False),
    Column("color_id", Integer, ForeignKey("colors.color_id"), nullable=False),
    Column("size_id", Integer, ForeignKey("sizes.size_id"), nullable=False),
    Column("sku", String(50), nullable=False, unique=True),
    Column("unit_price_cents", Integer, nullable=False),
    Column("stock_quantity", Integer, nullable=False, default=0),
    Column("is_active", Boolean, nullable=False, default=True),
    CheckConstraint("stock_quantity >= 0", name="ck_variants_stock"),
    CheckConstraint("unit_price_cents >= 0", name="ck_variants_price"),
    Index("ix_variants_product", "product_id"),
)

# (product, color, size) is unique among *active* variants only; a
# deactivated row may coexist with its replacement.
Index(
    "uq_variants_active_combo",
    variants.c.product_id,
    variants.c.color_id,
    variants.c.size_id,
    unique=True,
    sqlite_where=variants.c.is_active.is_(True),
    postgresql_where=variants.c.is_active.is_(True),
)

orders = Table(
    "orders",
    metadata,
    Column("order_id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(64), nullable=False),
    Column("shipping_address_ref", String(64), nullable=False),
    Column("order_status", String(20), nullable=False),
    Column("payment_status", String(20), nullable=False),
    Column("payment_method", String(20), nullable=False),
    Column("total_amount_cents", Integer, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("shipped_at", DateTime(timezone=True)),
    Column("delivered_at", DateTime(timezone=True)),
    Column("tracking_number", String(100)),
    Column("shipping_method", String(100)),
    Column("notes", Text),
    Column("cancellation_reason", Text),
    CheckConstraint(
        "order_status IN ('pending', 'processing', 'shipped', 'delivered', 'cancelled')",
        name="ck_orders_status",
    ),
    CheckConstraint("total_amount_cents >= 0", name="ck_orders_total"),
    Index("ix_orders_user", "user_id", "created_at"),
)

order_items = Table(
    "order_items",
    metadata,
    Column("order_item_id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Integer, ForeignKey("orders.order_id", ondelete="CASCADE"), nullable=False),
    # weak reference: the variant may be deactivated later
    Column("variant_id", Integer, ForeignKey("variants.variant_id"), nullable=False),
    Column("position", Integer, nullable=False),
    Column("sku", String(50), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("unit_price_cents", Integer, nullable=False),
    CheckConstraint("quantity > 0", name="ck_order_items_quantity"),
    Index("ix_order_items_order", "order_id"),
)
