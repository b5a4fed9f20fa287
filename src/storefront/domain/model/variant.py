"""Variant: one purchasable product/color/size combination.

A variant is the unit of inventory truth: it carries the only stock
counter in the system.  Instances are read snapshots; the counter itself
changes only through the VariantStock primitives.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Color, Size
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class Variant:
    """Point-in-time view of a variant row.

    Invariants:
    - ``stock_quantity`` is an integer >= 0
    - ``sku`` is non-empty
    """

    id: int
    product_id: int
    color_id: int
    size_id: int
    sku: str
    unit_price: Money
    stock_quantity: int
    active: bool = True
    color: Color | None = None
    size: Size | None = None

    def __post_init__(self) -> None:
        if not self.sku or not self.sku.strip():
            raise ValidationError(f"Variant #{self.id} must have a SKU")
        if not isinstance(self.stock_quantity, int) or isinstance(self.stock_quantity, bool):
            raise ValidationError(
                f"Stock quantity must be an integer, got {type(self.stock_quantity).__name__}"
            )
        if self.stock_quantity < 0:
            raise ValidationError(
                f"Stock quantity for {self.sku} cannot be negative, got {self.stock_quantity}"
            )

    @property
    def in_stock(self) -> bool:
        return self.active and self.stock_quantity > 0


@dataclass(frozen=True)
class StockShortfall:
    """Why a reservation could not be made."""

    variant_id: int
    available: int
    requested: int

    @property
    def shortfall(self) -> int:
        return max(self.requested - self.available, 0)


@dataclass(frozen=True)
class StockCheck:
    """Advisory answer to "could I buy this many right now?"."""

    variant_id: int
    current_stock: int
    requested: int

    @property
    def available(self) -> bool:
        return self.current_stock >= self.requested

    @property
    def shortfall(self) -> int:
        return max(self.requested - self.current_stock, 0)
