"""Application service: administrative stock changes (set level, restock)."""

from __future__ import annotations

from storefront.domain.exceptions import VariantNotFound
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.collaborators import LowStockObserver, PendingSignals
from storefront.domain.service.stock_adjuster import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    StockAdjuster,
)


class _StockCommandHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        low_stock_observer: LowStockObserver | None = None,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._uow = uow
        self._low_stock_observer = low_stock_observer
        self._low_stock_threshold = low_stock_threshold

    def handle(self, sku: str, quantity: int) -> int:
        signals = PendingSignals()
        with self._uow as uow:
            variant = uow.variants.get_by_sku(sku)
            if variant is None:
                raise VariantNotFound(sku)
            adjuster = StockAdjuster(uow.variants, signals, self._low_stock_threshold)
            new_quantity = self._apply(adjuster, variant.id, quantity)
            uow.commit()
        signals.flush_to(self._low_stock_observer)
        return new_quantity

    def _apply(self, adjuster: StockAdjuster, variant_id: int, quantity: int) -> int:
        raise NotImplementedError


class SetStockHandler(_StockCommandHandler):
    """Overwrite a variant's stock level."""

    def _apply(self, adjuster: StockAdjuster, variant_id: int, quantity: int) -> int:
        return adjuster.set_stock(variant_id, quantity)


class RestockHandler(_StockCommandHandler):
    """Add inbound supply to a variant's stock level."""

    def _apply(self, adjuster: StockAdjuster, variant_id: int, quantity: int) -> int:
        return adjuster.restock(variant_id, quantity)
