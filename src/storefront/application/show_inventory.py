"""Application service: inventory queries (low-stock report, stock check)."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import VariantNotFound
from storefront.domain.model.variant import StockCheck
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_adjuster import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    StockAdjuster,
)


@dataclass(frozen=True)
class InventoryLineDTO:
    variant_id: int
    sku: str
    product_id: int
    stock_quantity: int


class LowStockReportHandler:

    def __init__(self, uow: UnitOfWork, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> None:
        self._uow = uow
        self._threshold = threshold

    def handle(self, threshold: int | None = None) -> list[InventoryLineDTO]:
        with self._uow as uow:
            variants = uow.variants.find_low_stock(
                self._threshold if threshold is None else threshold
            )
        return [
            InventoryLineDTO(
                variant_id=v.id,
                sku=v.sku,
                product_id=v.product_id,
                stock_quantity=v.stock_quantity,
            )
            for v in variants
        ]


class CheckStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, sku: str, requested: int) -> StockCheck:
        with self._uow as uow:
            variant = uow.variants.get_by_sku(sku)
            if variant is None:
                raise VariantNotFound(sku)
            return StockAdjuster(uow.variants).check(variant.id, requested)
