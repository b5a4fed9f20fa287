"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidOrderRequest(ValidationError):
    """The order request is malformed; the client must fix it."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class VariantNotFound(EntityNotFoundError):
    """No active variant with this id (int) or SKU (str)."""

    def __init__(self, variant_id: int | str) -> None:
        label = f"#{variant_id}" if isinstance(variant_id, int) else f"'{variant_id}'"
        super().__init__(f"Variant {label} not found")
        self.variant_id = variant_id


class ProductNotFound(EntityNotFoundError):
    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product #{product_id} not found")
        self.product_id = product_id


class OrderNotFound(EntityNotFoundError):
    def __init__(self, order_id: int) -> None:
        super().__init__(f"Order #{order_id} not found")
        self.order_id = order_id


class InsufficientStock(DomainException):
    """Not enough stock to satisfy a reservation.

    Carries the numbers a client needs to adjust its cart without
    re-querying: what was available, what was requested, and the gap.
    """

    def __init__(self, variant_id: int, available: int, requested: int) -> None:
        super().__init__(
            f"Insufficient stock for variant #{variant_id} "
            f"(requested {requested}, available {available})"
        )
        self.variant_id = variant_id
        self.available = available
        self.requested = requested

    @property
    def shortfall(self) -> int:
        return max(self.requested - self.available, 0)


class InvalidStateTransition(DomainException):
    """The order cannot move from its current status to the requested one."""


class ConcurrencyConflict(DomainException):
    """The store rejected the transaction because of a competing writer.

    Nothing was committed, so the whole call may be retried once.
    """
