"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection

from storefront.domain.model.order import Order, OrderStatus, PaymentStatus
from storefront.domain.model.value_objects import Pagination


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> Order:
        """Insert a new order and its items; assigns ids and returns the order."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def save_transition(self, order: Order, expected: Collection[OrderStatus]) -> bool:
        """Persist *order*'s status fields if the stored status is in *expected*.

        This is a compare-and-set: it returns False, writing nothing,
        when another transaction already moved the order on.
        """

    @abstractmethod
    def save_payment(self, order: Order) -> None:
        """Persist payment status and method."""

    @abstractmethod
    def list_by_user(
        self,
        user_id: str,
        pagination: Pagination,
        status: OrderStatus | None = None,
        payment_status: PaymentStatus | None = None,
    ) -> tuple[list[Order], int]:
        """Return one page of a user's orders, newest first, plus the total count."""
