"""Read-side catalog types: listing filters, joined rows and product rollups."""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Color, Product, Size
from storefront.domain.model.value_objects import Money
from storefront.domain.model.variant import Variant


@dataclass(frozen=True)
class ProductFilters:
    """Facet and scalar filters for a product listing.

    Scalar filters (category, price range, search text) apply to the
    product; ``color_ids`` / ``size_ids`` apply to its variants.
    """

    category_id: int | None = None
    min_price: Money | None = None
    max_price: Money | None = None
    search_text: str | None = None
    color_ids: frozenset[int] = field(default_factory=frozenset)
    size_ids: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValidationError(
                f"Minimum price {self.min_price} exceeds maximum price {self.max_price}"
            )
        if self.search_text is not None and not self.search_text.strip():
            object.__setattr__(self, "search_text", None)


# Public sort names -> canonical field
SORT_FIELDS = {
    "name": "name",
    "price": "base_price",
    "base_price": "base_price",
    "created": "created_at",
    "created_at": "created_at",
    "lowest_price": "lowest_price",
    "total_stock": "total_stock",
}


@dataclass(frozen=True)
class SortSpec:
    field: str = "created_at"
    direction: str = "desc"

    def __post_init__(self) -> None:
        if self.field not in SORT_FIELDS:
            raise ValidationError(
                f"Cannot sort by '{self.field}'; choose one of {', '.join(sorted(SORT_FIELDS))}"
            )
        if self.direction not in ("asc", "desc"):
            raise ValidationError("Sort direction must be 'asc' or 'desc'")

    @property
    def canonical_field(self) -> str:
        return SORT_FIELDS[self.field]

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


@dataclass(frozen=True)
class CatalogRow:
    """One row of the product x variant join."""

    product: Product
    variant: Variant


@dataclass(frozen=True)
class PriceRange:
    low: Money
    high: Money

    def __str__(self) -> str:
        if self.low == self.high:
            return str(self.low)
        return f"{self.low} - {self.high}"


@dataclass(frozen=True)
class StockRollup:
    total_stock: int
    variant_count: int
    available_colors: tuple[Color, ...] = ()
    available_sizes: tuple[Size, ...] = ()
    price_range: PriceRange | None = None

    @property
    def has_stock(self) -> bool:
        return self.total_stock > 0


@dataclass(frozen=True)
class ProductListing:
    """A product with the variants that qualified for it and their rollup."""

    product: Product
    variants: tuple[Variant, ...]
    stock: StockRollup


@dataclass(frozen=True)
class ProductPage:
    items: list[ProductListing]
    total: int
    page: int
    page_size: int
    total_pages: int
