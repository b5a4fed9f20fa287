"""Application service: Update Order Status use case.

Moves an order forward along pending -> processing -> shipped ->
delivered.  No stock effect, except that a request to cancel is handed
to the cancel use case so that stock is given back.
"""

from __future__ import annotations

import logging

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import (
    InvalidStateTransition,
    OrderNotFound,
    ValidationError,
)
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def parse_order_status(value: str | OrderStatus) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Invalid order status '{value}'. Expected one of: {allowed}") from exc


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_id: int,
        new_status: str | OrderStatus,
        notes: str | None = None,
        tracking_number: str | None = None,
        shipping_method: str | None = None,
    ) -> OrderDTO:
        status = parse_order_status(new_status)
        if status == OrderStatus.CANCELLED:
            return CancelOrderHandler(self._uow).handle(order_id, reason=notes)
        has_tracking = bool(tracking_number or shipping_method)
        if has_tracking and status != OrderStatus.SHIPPED:
            raise ValidationError("Tracking details can only be recorded when shipping")

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFound(order_id)

            previous = order.status
            # shipped -> shipped with carrier details just updates tracking
            if not (has_tracking and previous == OrderStatus.SHIPPED):
                order.advance_to(status, notes=notes)
            if has_tracking:
                order.record_tracking(tracking_number, shipping_method)

            if not uow.orders.save_transition(order, [previous]):
                raise InvalidStateTransition(
                    f"Order #{order_id} was updated by another request; reload and retry"
                )
            uow.commit()

        logger.info(
            "order: method=update_status order_id=%s from=%s to=%s",
            order_id,
            previous.value,
            status.value,
        )
        return order_to_dto(order)
