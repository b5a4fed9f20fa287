"""Integration tests for the CreateOrder use case.

Uses the in-memory fake unit of work, no database.
"""

from dataclasses import replace

import pytest

from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import OrderItemSpec
from storefront.domain.exceptions import InsufficientStock, InvalidOrderRequest
from storefront.domain.model.order import OrderStatus, PaymentMethod
from storefront.domain.model.value_objects import Money
from tests.fakes import (
    FakeAddressBook,
    FakeUnitOfWork,
    RecordingObserver,
    RecordingPaymentRequester,
    make_variant,
)


def _setup(variants=None, **kwargs) -> tuple[CreateOrderHandler, FakeUnitOfWork]:
    """Build handler over a fake unit of work, optionally pre-loaded with variants."""
    if variants is None:
        variants = [
            make_variant(id=1, stock=10, price="15.00", sku="WID-1"),
            make_variant(id=2, stock=5, price="25.00", sku="GAD-1", size_id=2),
            make_variant(id=3, stock=0, price="5.00", sku="OUT-1", size_id=3),
        ]
    uow = FakeUnitOfWork(variants)
    return CreateOrderHandler(uow, **kwargs), uow


class TestCreateOrderHappyPath:

    def test_creates_order_with_correct_total(self):
        handler, _ = _setup()
        dto = handler.handle("user-1", "addr-1", [OrderItemSpec(1, 3), OrderItemSpec(2, 5)])
        assert dto.total == "$170.00"
        assert dto.status == "pending"
        assert dto.payment_status == "pending"
        assert len(dto.items) == 2

    def test_reserves_stock(self):
        handler, uow = _setup()
        handler.handle("user-1", "addr-1", [OrderItemSpec(1, 3), OrderItemSpec(2, 5)])
        assert uow.stock_of(1) == 7
        assert uow.stock_of(2) == 0
        assert uow.commits == 1

    def test_persists_order(self):
        handler, uow = _setup()
        dto = handler.handle("user-1", "addr-1", [OrderItemSpec(1, 1)])
        saved = uow.orders.get_by_id(dto.id)
        assert saved is not None
        assert saved.status == OrderStatus.PENDING
        assert saved.items[0].sku == "WID-1"
        assert saved.items[0].id is not None

    def test_sequential_ids(self):
        handler, _ = _setup()
        dto1 = handler.handle("user-1", "addr-1", [OrderItemSpec(1, 1)])
        dto2 = handler.handle("user-2", "addr-2", [OrderItemSpec(2, 1)])
        assert dto2.id == dto1.id + 1

    def test_payment_method_recorded(self):
        handler, _ = _setup()
        dto = handler.handle(
            "user-1", "addr-1", [OrderItemSpec(1, 1)], payment_method=PaymentMethod.CASH
        )
        assert dto.payment_method == "cash"

    def test_duplicate_lines_merged(self):
        handler, uow = _setup()
        dto = handler.handle("user-1", "addr-1", [OrderItemSpec(1, 2), OrderItemSpec(1, 3)])
        assert len(dto.items) == 1
        assert dto.items[0].quantity == 5
        assert uow.stock_of(1) == 5


class TestCreateOrderPriceLock:

    def test_price_snapshot_at_creation(self):
        handler, uow = _setup()
        dto = handler.handle("user-1", "addr-1", [OrderItemSpec(1, 1)])

        # Reprice the variant after the order was placed
        uow.variants.store[1] = replace(uow.variants.store[1], unit_price=Money.of("99.99"))

        saved = uow.orders.get_by_id(dto.id)
        assert str(saved.total) == "$15.00"
        assert saved.items[0].unit_price == Money.of("15.00")


class TestCreateOrderAllOrNothing:

    def test_insufficient_stock_reports_numbers(self):
        handler, _ = _setup()
        with pytest.raises(InsufficientStock) as excinfo:
            handler.handle("user-1", "addr-1", [OrderItemSpec(2, 6)])
        assert excinfo.value.variant_id == 2
        assert excinfo.value.available == 5
        assert excinfo.value.requested == 6
        assert excinfo.value.shortfall == 1

    def test_later_failure_undoes_earlier_reservations(self):
        handler, uow = _setup()
        with pytest.raises(InsufficientStock):
            handler.handle("user-1", "addr-1", [OrderItemSpec(1, 4), OrderItemSpec(3, 1)])
        assert uow.stock_of(1) == 10
        assert uow.stock_of(3) == 0
        assert uow.orders.store == {}
        assert uow.commits == 0

    def test_second_order_for_last_units_fails(self):
        handler, uow = _setup([make_variant(id=1, stock=5, sku="A")])
        handler.handle("user-1", "addr-1", [OrderItemSpec(1, 3)])
        with pytest.raises(InsufficientStock) as excinfo:
            handler.handle("user-2", "addr-2", [OrderItemSpec(1, 3)])
        assert excinfo.value.available == 2
        assert uow.stock_of(1) == 2
        assert len(uow.orders.store) == 1


class TestCreateOrderValidation:

    def test_empty_items(self):
        handler, uow = _setup()
        with pytest.raises(InvalidOrderRequest, match="at least one item"):
            handler.handle("user-1", "addr-1", [])
        assert uow.commits == 0

    @pytest.mark.parametrize("qty", [0, -2])
    def test_non_positive_quantity(self, qty):
        handler, _ = _setup()
        with pytest.raises(InvalidOrderRequest, match="Item 1"):
            handler.handle("user-1", "addr-1", [OrderItemSpec(1, qty)])

    def test_unknown_variant(self):
        handler, uow = _setup()
        with pytest.raises(InvalidOrderRequest, match="#99"):
            handler.handle("user-1", "addr-1", [OrderItemSpec(1, 1), OrderItemSpec(99, 1)])
        assert uow.stock_of(1) == 10

    def test_inactive_variant(self):
        handler, _ = _setup([make_variant(id=1, stock=5, active=False)])
        with pytest.raises(InvalidOrderRequest):
            handler.handle("user-1", "addr-1", [OrderItemSpec(1, 1)])

    def test_missing_address(self):
        handler, _ = _setup()
        with pytest.raises(InvalidOrderRequest, match="address"):
            handler.handle("user-1", "", [OrderItemSpec(1, 1)])

    def test_address_not_owned_by_user(self):
        handler, uow = _setup(address_book=FakeAddressBook({"user-1": {"addr-1"}}))
        with pytest.raises(InvalidOrderRequest, match="cannot be used"):
            handler.handle("user-1", "addr-9", [OrderItemSpec(1, 1)])
        assert uow.stock_of(1) == 10


class TestCreateOrderCollaborators:

    def test_low_stock_signal_after_commit(self):
        observer = RecordingObserver()
        handler, _ = _setup(low_stock_observer=observer, low_stock_threshold=3)
        handler.handle("user-1", "addr-1", [OrderItemSpec(2, 3)])
        assert [(s.variant_id, s.remaining_quantity) for s in observer.signals] == [(2, 2)]

    def test_no_signal_when_order_rolls_back(self):
        observer = RecordingObserver()
        handler, _ = _setup(low_stock_observer=observer, low_stock_threshold=3)
        with pytest.raises(InsufficientStock):
            handler.handle("user-1", "addr-1", [OrderItemSpec(2, 3), OrderItemSpec(3, 1)])
        assert observer.signals == []

    def test_payment_requested_with_total(self):
        payments = RecordingPaymentRequester()
        handler, _ = _setup(payment_requester=payments)
        dto = handler.handle("user-1", "addr-1", [OrderItemSpec(1, 2)])
        assert payments.requests == [(dto.id, Money.of("30.00"))]

    def test_payment_failure_keeps_order(self):
        handler, uow = _setup(payment_requester=RecordingPaymentRequester(fail=True))
        dto = handler.handle("user-1", "addr-1", [OrderItemSpec(1, 2)])
        assert uow.orders.get_by_id(dto.id) is not None
        assert uow.stock_of(1) == 8
