"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here; stock movements that go with
a state change are coordinated by the application handlers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import (
    InvalidOrderRequest,
    InvalidStateTransition,
    ValidationError,
)
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class PaymentMethod(Enum):
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"
    E_WALLET = "e_wallet"


# Position along the fulfilment path; cancellation sits outside it.
_FORWARD_RANK = {
    OrderStatus.PENDING: 0,
    OrderStatus.PROCESSING: 1,
    OrderStatus.SHIPPED: 2,
    OrderStatus.DELIVERED: 3,
}

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})
CANCELLABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.PROCESSING})

MAX_NOTES_LENGTH = 1000


@dataclass(frozen=True)
class OrderItem:
    """A line of an order with the price captured when it was placed.

    Never changes after creation; cancelling the order leaves it in place
    as the audit record of what stock to give back.
    """

    variant_id: int
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    sku: str = ""
    id: int | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    user_id: str
    shipping_address_ref: str
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    tracking_number: str | None = None
    shipping_method: str | None = None
    notes: str | None = None
    cancellation_reason: str | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        shipping_address_ref: str,
        items: list[OrderItem],
        payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
        notes: str | None = None,
    ) -> Order:
        """Create a new pending order, enforcing all invariants."""
        if not user_id or not str(user_id).strip():
            raise InvalidOrderRequest("User id is required")
        if not shipping_address_ref or not str(shipping_address_ref).strip():
            raise InvalidOrderRequest("Shipping address is required")
        if not items:
            raise InvalidOrderRequest("Order must contain at least one item")
        _check_notes(notes)

        return Order(
            id=None,
            user_id=str(user_id).strip(),
            shipping_address_ref=str(shipping_address_ref).strip(),
            items=list(items),
            payment_method=payment_method,
            notes=notes,
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        if self.status in TERMINAL_STATUSES:
            return False
        if new_status == OrderStatus.CANCELLED:
            return self.status in CANCELLABLE_STATUSES
        return _FORWARD_RANK[new_status] > _FORWARD_RANK[self.status]

    def advance_to(
        self,
        new_status: OrderStatus,
        at: datetime | None = None,
        notes: str | None = None,
    ) -> None:
        """Move forward along pending -> processing -> shipped -> delivered.

        Steps may be skipped but never reversed.  ``shipped`` and
        ``delivered`` stamp their timestamps.  Cancellation has its own
        method because it carries stock compensation.
        """
        if new_status == OrderStatus.CANCELLED:
            raise InvalidStateTransition("Use cancel() to cancel an order")
        if not self.can_transition_to(new_status):
            raise InvalidStateTransition(
                f"Cannot move order #{self.id} from {self.status.value} "
                f"to {new_status.value}"
            )
        _check_notes(notes)

        when = at or datetime.now(timezone.utc)
        if new_status == OrderStatus.SHIPPED:
            self.shipped_at = when
        elif new_status == OrderStatus.DELIVERED:
            self.delivered_at = when
            if self.shipped_at is None:
                self.shipped_at = when
        if notes:
            self.notes = notes
        self.status = new_status

    def cancel(self, reason: str | None = None) -> None:
        """Transition PENDING|PROCESSING -> CANCELLED.

        Stock release for every item must happen in the same transaction
        as the persisted status change (coordinated by the handler).
        """
        if self.status not in CANCELLABLE_STATUSES:
            raise InvalidStateTransition(
                f"Order #{self.id} cannot be cancelled in {self.status.value} status"
            )
        _check_notes(reason)
        self.status = OrderStatus.CANCELLED
        self.cancellation_reason = reason

    def record_tracking(
        self,
        tracking_number: str | None = None,
        shipping_method: str | None = None,
    ) -> None:
        """Attach carrier details; only a shipped order has a parcel to track."""
        if self.status != OrderStatus.SHIPPED:
            raise ValidationError("Tracking details can only be recorded when shipping")
        if tracking_number:
            self.tracking_number = tracking_number
        if shipping_method:
            self.shipping_method = shipping_method

    def record_payment(
        self,
        payment_status: PaymentStatus,
        payment_method: PaymentMethod | None = None,
    ) -> None:
        """Record a payment outcome reported by the payment collaborator."""
        self.payment_status = payment_status
        if payment_method is not None:
            self.payment_method = payment_method

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


def _check_notes(notes: str | None) -> None:
    if notes is not None and len(notes) > MAX_NOTES_LENGTH:
        raise ValidationError(f"Notes cannot exceed {MAX_NOTES_LENGTH} characters")
