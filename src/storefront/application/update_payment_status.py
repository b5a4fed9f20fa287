"""Application service: Update Payment Status use case.

Payment outcomes come back from the payment collaborator.  They are
recorded on the order and never touch stock.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import OrderNotFound, ValidationError
from storefront.domain.model.order import PaymentMethod, PaymentStatus
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def parse_payment_method(value: str | PaymentMethod) -> PaymentMethod:
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError(f"Invalid payment method '{value}'. Expected one of: {allowed}") from exc


class UpdatePaymentStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_id: int,
        payment_status: str | PaymentStatus,
        payment_method: str | PaymentMethod | None = None,
    ) -> OrderDTO:
        if isinstance(payment_status, str):
            try:
                payment_status = PaymentStatus(payment_status.strip().lower())
            except ValueError as exc:
                raise ValidationError(f"Invalid payment status '{payment_status}'") from exc
        method = parse_payment_method(payment_method) if payment_method is not None else None

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFound(order_id)
            order.record_payment(payment_status, method)
            uow.orders.save_payment(order)
            uow.commit()

        logger.info(
            "order: method=update_payment order_id=%s payment_status=%s",
            order_id,
            order.payment_status.value,
        )
        return order_to_dto(order)
