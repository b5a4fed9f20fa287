"""Ports to the collaborators that live outside this core.

Address book, payment and alerting are owned by other services; the core
only needs these narrow interfaces to talk to them.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.model.value_objects import Money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LowStockSignal:
    variant_id: int
    remaining_quantity: int


class LowStockObserver(ABC):

    @abstractmethod
    def notify(self, signal: LowStockSignal) -> None:
        """Receive a low-stock signal. Fire-and-forget."""


class PendingSignals(LowStockObserver):
    """Holds signals raised inside a transaction until it commits.

    A rolled-back reservation never reached the store, so its signal is
    simply dropped with the buffer.
    """

    def __init__(self) -> None:
        self._signals: list[LowStockSignal] = []

    def notify(self, signal: LowStockSignal) -> None:
        self._signals.append(signal)

    def __len__(self) -> int:
        return len(self._signals)

    def flush_to(self, observer: LowStockObserver | None) -> None:
        signals, self._signals = self._signals, []
        if observer is None:
            return
        for signal in signals:
            try:
                observer.notify(signal)
            except Exception:
                logger.exception(
                    "low_stock: delivery failed variant_id=%s remaining=%s",
                    signal.variant_id,
                    signal.remaining_quantity,
                )


class AddressBook(ABC):

    @abstractmethod
    def is_shippable(self, user_id: str, address_ref: str) -> bool:
        """True if *address_ref* belongs to *user_id* and can be shipped to."""


class PaymentRequester(ABC):

    @abstractmethod
    def request_payment(self, order_id: int, amount: Money) -> None:
        """Hand a freshly created order to the payment service."""
