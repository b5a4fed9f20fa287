"""Abstract access to the variant stock counters.

This is the only interface allowed to change ``stock_quantity``.  Both
mutating primitives must be implemented as a single atomic statement
against the store; a read followed by a write is how oversells happen.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.model.variant import Variant


@dataclass(frozen=True)
class DecrementResult:
    """Outcome of a conditional decrement.

    ``new_quantity`` is the counter after the write when ``ok``; otherwise
    the quantity visible at the time of the failed attempt.
    """

    ok: bool
    new_quantity: int


class VariantStock(ABC):

    @abstractmethod
    def conditional_decrement(self, variant_id: int, amount: int) -> DecrementResult:
        """Decrement by *amount* only if at least *amount* is in stock.

        Raises VariantNotFound if the id is not an active variant.
        """

    @abstractmethod
    def increment(self, variant_id: int, amount: int) -> int:
        """Add *amount* to the counter and return the new quantity."""

    @abstractmethod
    def set_absolute(self, variant_id: int, amount: int) -> int:
        """Administrative override of the counter."""

    @abstractmethod
    def read(self, variant_id: int) -> int:
        """Current quantity. Advisory only; never a reservation."""

    @abstractmethod
    def get(self, variant_id: int) -> Variant | None:
        """Return the active variant with this id, or None."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Variant | None:
        """Return the active variant with this SKU, or None."""

    @abstractmethod
    def find_low_stock(self, threshold: int) -> list[Variant]:
        """Active variants at or below *threshold*, lowest stock first."""
