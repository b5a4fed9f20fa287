"""Application service: Create Order use case.

The transactional boundary for placing an order.  Inside one unit of
work it prices every line from the variant table, reserves stock for
every line and inserts the order with its items.  The first reservation
that cannot be met aborts the whole unit of work, so either every
counter moves and the order exists, or nothing changed at all.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from storefront.domain.exceptions import (
    InsufficientStock,
    InvalidOrderRequest,
    ValidationError,
    VariantNotFound,
)
from storefront.domain.model.order import Order, OrderItem, PaymentMethod
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.collaborators import (
    AddressBook,
    LowStockObserver,
    PaymentRequester,
    PendingSignals,
)
from storefront.domain.service.stock_adjuster import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    StockAdjuster,
)

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        low_stock_observer: LowStockObserver | None = None,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        address_book: AddressBook | None = None,
        payment_requester: PaymentRequester | None = None,
    ) -> None:
        self._uow = uow
        self._low_stock_observer = low_stock_observer
        self._low_stock_threshold = low_stock_threshold
        self._address_book = address_book
        self._payment_requester = payment_requester

    def handle(
        self,
        user_id: str,
        shipping_address_ref: str,
        item_specs: list[OrderItemSpec],
        payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
        notes: str | None = None,
    ) -> OrderDTO:
        """Place an order.

        Steps:
        1. Validate the request shape (non-empty, positive quantities).
        2. Price each line from the variant's current unit price.
        3. Reserve stock for each line; the first shortfall rolls back.
        4. Persist order and items in the same transaction.

        Raises InvalidOrderRequest or InsufficientStock; in both cases
        nothing was written.
        """
        quantities = _merge_specs(item_specs)
        if self._address_book is not None and not self._address_book.is_shippable(
            user_id, shipping_address_ref
        ):
            raise InvalidOrderRequest(
                f"Address '{shipping_address_ref}' cannot be used by user '{user_id}'"
            )

        signals = PendingSignals()
        with self._uow as uow:
            adjuster = StockAdjuster(uow.variants, signals, self._low_stock_threshold)

            line_items: list[OrderItem] = []
            for variant_id, quantity in quantities.items():
                variant = uow.variants.get(variant_id)
                if variant is None:
                    raise InvalidOrderRequest(f"Variant #{variant_id} is not available")
                line_items.append(
                    OrderItem(
                        variant_id=variant.id,
                        quantity=quantity,
                        unit_price=variant.unit_price,  # <-- price snapshot
                        sku=variant.sku,
                    )
                )

            order = Order.create(
                user_id=user_id,
                shipping_address_ref=shipping_address_ref,
                items=line_items,
                payment_method=payment_method,
                notes=notes,
            )

            for item in order.items:
                try:
                    outcome = adjuster.reserve(item.variant_id, item.quantity.value)
                except VariantNotFound as exc:
                    raise InvalidOrderRequest(str(exc)) from exc
                if not outcome.ok:
                    shortfall = outcome.shortfall
                    raise InsufficientStock(
                        variant_id=shortfall.variant_id,
                        available=shortfall.available,
                        requested=shortfall.requested,
                    )

            uow.orders.add(order)
            uow.commit()

        logger.info(
            "order: method=create order_id=%s user_id=%s items=%s total=%s",
            order.id,
            order.user_id,
            len(order.items),
            order.total,
        )
        signals.flush_to(self._low_stock_observer)
        self._request_payment(order)
        return order_to_dto(order)

    def _request_payment(self, order: Order) -> None:
        if self._payment_requester is None:
            return
        # the order is committed; payment follows up asynchronously
        try:
            self._payment_requester.request_payment(order.id, order.total)
        except Exception:
            logger.exception("order: payment hand-off failed order_id=%s", order.id)


def _merge_specs(item_specs: list[OrderItemSpec]) -> dict[int, Quantity]:
    """Validate the requested lines and fold repeated variants into one line."""
    if not item_specs:
        raise InvalidOrderRequest("Order must contain at least one item")

    merged: dict[int, int] = {}
    for position, spec in enumerate(item_specs, start=1):
        if not isinstance(spec.variant_id, int) or isinstance(spec.variant_id, bool):
            raise InvalidOrderRequest(f"Item {position}: variant id must be an integer")
        try:
            Quantity(spec.quantity)
        except ValidationError as exc:
            raise InvalidOrderRequest(f"Item {position}: {exc}") from exc
        merged[spec.variant_id] = merged.get(spec.variant_id, 0) + spec.quantity

    return {variant_id: Quantity(qty) for variant_id, qty in merged.items()}
