"""Application service: Cancel Order use case.

Only pending or processing orders can be cancelled.  The status change
and the stock release for every item happen in one unit of work, and the
status change is a compare-and-set on the stored status: if two cancels
race, the second finds the order already cancelled and is rejected
before it can release anything a second time.

A variant that no longer resolves (deactivated since the order was
placed) is logged and skipped.  Refusing the cancellation over it would
be worse than leaving that one counter unrestored.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import (
    InvalidStateTransition,
    OrderNotFound,
    VariantNotFound,
)
from storefront.domain.model.order import CANCELLABLE_STATUSES
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_adjuster import StockAdjuster

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, reason: str | None = None) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFound(order_id)

            order.cancel(reason)
            if not uow.orders.save_transition(order, CANCELLABLE_STATUSES):
                raise InvalidStateTransition(
                    f"Order #{order_id} was updated by another request and can no longer be cancelled"
                )

            adjuster = StockAdjuster(uow.variants)
            skipped: list[int] = []
            for item in order.items:
                try:
                    adjuster.release(item.variant_id, item.quantity.value)
                except VariantNotFound:
                    skipped.append(item.variant_id)
                    logger.warning(
                        "order: stock not restored order_id=%s variant_id=%s quantity=%s reason=variant_missing",
                        order_id,
                        item.variant_id,
                        item.quantity.value,
                    )

            uow.commit()

        logger.info(
            "order: method=cancel order_id=%s released=%s skipped=%s",
            order_id,
            len(order.items) - len(skipped),
            len(skipped),
        )
        return order_to_dto(order)
