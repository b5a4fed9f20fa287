"""Application service: Show Order and List Orders use cases (queries)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, OrderPageDTO, order_to_dto
from storefront.domain.exceptions import OrderNotFound, ValidationError
from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.domain.model.value_objects import Pagination
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order_to_dto(order)


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: str,
        pagination: Pagination | None = None,
        status: str | None = None,
        payment_status: str | None = None,
    ) -> OrderPageDTO:
        """One page of a user's orders, newest first."""
        pagination = pagination or Pagination()
        try:
            status_filter = OrderStatus(status) if status else None
            payment_filter = PaymentStatus(payment_status) if payment_status else None
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        with self._uow as uow:
            orders, total = uow.orders.list_by_user(
                user_id, pagination, status=status_filter, payment_status=payment_filter
            )

        return OrderPageDTO(
            orders=[order_to_dto(order) for order in orders],
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
            total_pages=pagination.total_pages(total),
        )
