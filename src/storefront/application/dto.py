"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.catalog import ProductListing, ProductPage
from storefront.domain.model.order import Order
from storefront.domain.model.variant import Variant

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (variant id + quantity)."""

    variant_id: int
    quantity: int


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order line as displayed to the user."""

    variant_id: int
    sku: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    user_id: str
    shipping_address_ref: str
    status: str
    payment_status: str
    payment_method: str
    items: list[OrderItemDTO]
    total: str
    created_at: str
    shipped_at: str | None = None
    delivered_at: str | None = None
    tracking_number: str | None = None
    shipping_method: str | None = None
    notes: str | None = None
    cancellation_reason: str | None = None


@dataclass(frozen=True)
class OrderPageDTO:
    orders: list[OrderDTO]
    total: int
    page: int
    page_size: int
    total_pages: int


@dataclass(frozen=True)
class VariantDTO:
    id: int
    sku: str
    color: str
    size: str
    unit_price: str
    stock_quantity: int


@dataclass(frozen=True)
class ProductSummaryDTO:
    """Output: one deduplicated product in a listing or detail view."""

    id: int
    name: str
    base_price: str
    category_id: int
    total_stock: int
    has_stock: bool
    variant_count: int
    colors: list[str]
    sizes: list[str]
    price_range: str
    variants: list[VariantDTO]


@dataclass(frozen=True)
class ProductPageDTO:
    items: list[ProductSummaryDTO]
    total: int
    page: int
    page_size: int
    total_pages: int


# --- Mapping ------------------------------------------------------------------


def _stamp(value) -> str | None:
    return value.strftime(_TIMESTAMP_FORMAT) if value is not None else None


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        shipping_address_ref=order.shipping_address_ref,
        status=order.status.value,
        payment_status=order.payment_status.value,
        payment_method=order.payment_method.value,
        items=[
            OrderItemDTO(
                variant_id=item.variant_id,
                sku=item.sku,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        total=str(order.total),
        created_at=_stamp(order.created_at),  # type: ignore[arg-type]
        shipped_at=_stamp(order.shipped_at),
        delivered_at=_stamp(order.delivered_at),
        tracking_number=order.tracking_number,
        shipping_method=order.shipping_method,
        notes=order.notes,
        cancellation_reason=order.cancellation_reason,
    )


def variant_to_dto(variant: Variant) -> VariantDTO:
    return VariantDTO(
        id=variant.id,
        sku=variant.sku,
        color=variant.color.name if variant.color else str(variant.color_id),
        size=variant.size.value if variant.size else str(variant.size_id),
        unit_price=str(variant.unit_price),
        stock_quantity=variant.stock_quantity,
    )


def listing_to_dto(listing: ProductListing) -> ProductSummaryDTO:
    product, stock = listing.product, listing.stock
    return ProductSummaryDTO(
        id=product.id,
        name=product.name,
        base_price=str(product.base_price),
        category_id=product.category_id,
        total_stock=stock.total_stock,
        has_stock=stock.has_stock,
        variant_count=stock.variant_count,
        colors=[color.name for color in stock.available_colors],
        sizes=[size.value for size in stock.available_sizes],
        price_range=str(stock.price_range) if stock.price_range else "-",
        variants=[variant_to_dto(v) for v in listing.variants],
    )


def page_to_dto(page: ProductPage) -> ProductPageDTO:
    return ProductPageDTO(
        items=[listing_to_dto(item) for item in page.items],
        total=page.total,
        page=page.page,
        page_size=page.page_size,
        total_pages=page.total_pages,
    )
