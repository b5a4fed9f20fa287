"""Unit tests for the Order aggregate and its status machine."""

from datetime import datetime, timezone

import pytest

from storefront.domain.exceptions import (
    InvalidOrderRequest,
    InvalidStateTransition,
    ValidationError,
)
from storefront.domain.model.order import (
    MAX_NOTES_LENGTH,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from storefront.domain.model.value_objects import Money, Quantity


def _make_item(variant_id: int = 1, qty: int = 1, price: str = "15.00") -> OrderItem:
    """Helper to build a valid line item."""
    return OrderItem(
        variant_id=variant_id,
        quantity=Quantity(qty),
        unit_price=Money.of(price),
        sku=f"SKU-{variant_id}",
    )


def _order(status: OrderStatus = OrderStatus.PENDING) -> Order:
    order = Order.create("user-1", "addr-1", [_make_item()])
    order.id = 7
    order.status = status
    return order


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create("user-1", "addr-1", [_make_item(qty=2, price="10.00")])
        assert order.user_id == "user-1"
        assert order.status == OrderStatus.PENDING
        assert order.payment_status == PaymentStatus.PENDING
        assert order.payment_method == PaymentMethod.CREDIT_CARD
        assert order.total == Money.of("20.00")

    def test_id_is_none_for_new_orders(self):
        order = Order.create("user-1", "addr-1", [_make_item()])
        assert order.id is None  # assigned by repository

    def test_total_is_sum_of_line_items(self):
        order = Order.create(
            "user-1",
            "addr-1",
            [_make_item(1, qty=3, price="15.00"), _make_item(2, qty=5, price="25.00")],
        )
        assert order.total == Money.of("170.00")

    def test_empty_items_rejected(self):
        with pytest.raises(InvalidOrderRequest, match="at least one item"):
            Order.create("user-1", "addr-1", [])

    def test_missing_user_rejected(self):
        with pytest.raises(InvalidOrderRequest, match="User"):
            Order.create("  ", "addr-1", [_make_item()])

    def test_missing_address_rejected(self):
        with pytest.raises(InvalidOrderRequest, match="address"):
            Order.create("user-1", "", [_make_item()])

    def test_overlong_notes_rejected(self):
        with pytest.raises(ValidationError, match="Notes"):
            Order.create("user-1", "addr-1", [_make_item()], notes="x" * (MAX_NOTES_LENGTH + 1))


class TestForwardTransitions:

    def test_pending_to_processing(self):
        order = _order()
        order.advance_to(OrderStatus.PROCESSING)
        assert order.status == OrderStatus.PROCESSING

    def test_shipping_stamps_shipped_at(self):
        when = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        order = _order(OrderStatus.PROCESSING)
        order.advance_to(OrderStatus.SHIPPED, at=when)
        assert order.shipped_at == when
        assert order.delivered_at is None

    def test_delivery_stamps_both_when_shipping_was_skipped(self):
        when = datetime(2024, 5, 2, tzinfo=timezone.utc)
        order = _order(OrderStatus.PROCESSING)
        order.advance_to(OrderStatus.DELIVERED, at=when)
        assert order.delivered_at == when
        assert order.shipped_at == when
        assert order.is_terminal

    def test_steps_can_be_skipped(self):
        order = _order()
        order.advance_to(OrderStatus.SHIPPED)
        assert order.status == OrderStatus.SHIPPED

    def test_cannot_move_backwards(self):
        order = _order(OrderStatus.SHIPPED)
        with pytest.raises(InvalidStateTransition, match="shipped to processing"):
            order.advance_to(OrderStatus.PROCESSING)

    def test_cannot_repeat_status(self):
        order = _order(OrderStatus.PROCESSING)
        with pytest.raises(InvalidStateTransition):
            order.advance_to(OrderStatus.PROCESSING)

    def test_delivered_is_terminal(self):
        order = _order(OrderStatus.DELIVERED)
        assert not order.can_transition_to(OrderStatus.SHIPPED)
        assert not order.can_transition_to(OrderStatus.CANCELLED)

    def test_cancel_is_not_a_forward_step(self):
        order = _order()
        with pytest.raises(InvalidStateTransition, match="cancel"):
            order.advance_to(OrderStatus.CANCELLED)

    def test_notes_recorded(self):
        order = _order()
        order.advance_to(OrderStatus.PROCESSING, notes="packed")
        assert order.notes == "packed"


class TestCancel:

    @pytest.mark.parametrize("status", [OrderStatus.PENDING, OrderStatus.PROCESSING])
    def test_cancellable_statuses(self, status):
        order = _order(status)
        order.cancel("changed my mind")
        assert order.status == OrderStatus.CANCELLED
        assert order.cancellation_reason == "changed my mind"

    @pytest.mark.parametrize(
        "status", [OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED]
    )
    def test_not_cancellable(self, status):
        order = _order(status)
        with pytest.raises(InvalidStateTransition, match="cannot be cancelled"):
            order.cancel()

    def test_items_survive_cancellation(self):
        order = _order()
        order.cancel()
        assert len(order.items) == 1


class TestTracking:

    def test_record_tracking_on_shipped_order(self):
        order = _order(OrderStatus.SHIPPED)
        order.record_tracking("1Z999", "UPS")
        assert order.tracking_number == "1Z999"
        assert order.shipping_method == "UPS"
        assert order.status == OrderStatus.SHIPPED

    def test_method_kept_when_only_number_changes(self):
        order = _order(OrderStatus.SHIPPED)
        order.record_tracking("1Z999", "UPS")
        order.record_tracking("1Z000")
        assert order.tracking_number == "1Z000"
        assert order.shipping_method == "UPS"

    @pytest.mark.parametrize(
        "status", [OrderStatus.PENDING, OrderStatus.PROCESSING, OrderStatus.DELIVERED]
    )
    def test_rejected_unless_shipped(self, status):
        order = _order(status)
        with pytest.raises(ValidationError, match="Tracking"):
            order.record_tracking("1Z999")


class TestPayment:

    def test_record_payment_keeps_method_by_default(self):
        order = _order()
        order.record_payment(PaymentStatus.COMPLETED)
        assert order.payment_status == PaymentStatus.COMPLETED
        assert order.payment_method == PaymentMethod.CREDIT_CARD

    def test_record_payment_with_method(self):
        order = _order()
        order.record_payment(PaymentStatus.FAILED, PaymentMethod.E_WALLET)
        assert order.payment_method == PaymentMethod.E_WALLET
