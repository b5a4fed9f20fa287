"""Domain service: Stock Adjuster.

Named stock operations layered on the VariantStock primitives.  Every
decrease goes through ``conditional_decrement`` so that concurrent
reservations can never take a counter below zero; there is no
check-then-write path anywhere in this module.

The adjuster does not deduplicate: callers decide how often to call
``release`` (the cancel handler calls it once per order item).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.variant import StockCheck, StockShortfall
from storefront.domain.repository.variant_stock import VariantStock
from storefront.domain.service.collaborators import LowStockObserver, LowStockSignal

logger = logging.getLogger(__name__)

DEFAULT_LOW_STOCK_THRESHOLD = 10


@dataclass(frozen=True)
class ReservationOutcome:
    variant_id: int
    requested: int
    remaining: int | None = None
    shortfall: StockShortfall | None = None

    @property
    def ok(self) -> bool:
        return self.shortfall is None


class StockAdjuster:

    def __init__(
        self,
        variant_stock: VariantStock,
        observer: LowStockObserver | None = None,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        if low_stock_threshold < 0:
            raise ValidationError("Low-stock threshold cannot be negative")
        self._stock = variant_stock
        self._observer = observer
        self._threshold = low_stock_threshold

    def reserve(self, variant_id: int, quantity: int) -> ReservationOutcome:
        """Take *quantity* units out of stock, or report why not.

        Raises VariantNotFound for an unknown or inactive variant.
        """
        _require_positive(quantity, "Reservation")
        result = self._stock.conditional_decrement(variant_id, quantity)
        if not result.ok:
            logger.info(
                "stock: method=reserve variant_id=%s requested=%s available=%s result=insufficient",
                variant_id,
                quantity,
                result.new_quantity,
            )
            return ReservationOutcome(
                variant_id=variant_id,
                requested=quantity,
                shortfall=StockShortfall(
                    variant_id=variant_id,
                    available=result.new_quantity,
                    requested=quantity,
                ),
            )

        logger.debug(
            "stock: method=reserve variant_id=%s requested=%s remaining=%s",
            variant_id,
            quantity,
            result.new_quantity,
        )
        self._signal_if_low(variant_id, result.new_quantity)
        return ReservationOutcome(
            variant_id=variant_id, requested=quantity, remaining=result.new_quantity
        )

    def release(self, variant_id: int, quantity: int) -> int:
        """Give back stock taken by a reservation (order cancellation)."""
        _require_positive(quantity, "Release")
        new_quantity = self._stock.increment(variant_id, quantity)
        logger.debug(
            "stock: method=release variant_id=%s quantity=%s new_quantity=%s",
            variant_id,
            quantity,
            new_quantity,
        )
        return new_quantity

    def restock(self, variant_id: int, quantity: int) -> int:
        """Add inbound supply to a variant."""
        _require_positive(quantity, "Restock")
        new_quantity = self._stock.increment(variant_id, quantity)
        logger.info(
            "stock: method=restock variant_id=%s quantity=%s new_quantity=%s",
            variant_id,
            quantity,
            new_quantity,
        )
        return new_quantity

    def set_stock(self, variant_id: int, quantity: int) -> int:
        """Administrative override. Never used on the order path."""
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        new_quantity = self._stock.set_absolute(variant_id, quantity)
        logger.info("stock: method=set variant_id=%s new_quantity=%s", variant_id, new_quantity)
        self._signal_if_low(variant_id, new_quantity)
        return new_quantity

    def check(self, variant_id: int, requested: int) -> StockCheck:
        """Advisory availability check; reserves nothing."""
        _require_positive(requested, "Requested")
        return StockCheck(
            variant_id=variant_id,
            current_stock=self._stock.read(variant_id),
            requested=requested,
        )

    # --- Internal helpers -----------------------------------------------------

    def _signal_if_low(self, variant_id: int, remaining: int) -> None:
        if remaining > self._threshold or self._observer is None:
            return
        self._observer.notify(LowStockSignal(variant_id=variant_id, remaining_quantity=remaining))


def _require_positive(quantity: int, label: str) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise ValidationError(f"{label} quantity must be a positive integer")
