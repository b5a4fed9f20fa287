"""Transaction boundary over the repositories.

A unit of work is request-scoped: enter it, use its repositories, call
``commit()``.  Leaving the block without committing, or with an
exception, rolls every change back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.variant_stock import VariantStock


class UnitOfWork(ABC):
    variants: VariantStock
    orders: OrderRepository
    catalog: CatalogRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change since ``__enter__`` durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes. A no-op after a commit."""
