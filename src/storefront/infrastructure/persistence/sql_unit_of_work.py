"""SQLAlchemy-backed unit of work.

One connection and one transaction per ``with`` block.  Lock and
serialization failures raised by the store surface as
ConcurrencyConflict; by then the transaction has been rolled back.
"""

from __future__ import annotations

import logging

from sqlalchemy.engine import Connection, Engine, RootTransaction
from sqlalchemy.exc import DBAPIError

from storefront.domain.exceptions import ConcurrencyConflict
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.engine import is_contention
from storefront.infrastructure.persistence.sql_catalog_repository import SqlCatalogRepository
from storefront.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from storefront.infrastructure.persistence.sql_variant_stock import SqlVariantStock

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._connection: Connection | None = None
        self._transaction: RootTransaction | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self._connection is not None:
            raise RuntimeError("Unit of work is already active")
        self._connection = self._engine.connect()
        try:
            self._transaction = self._connection.begin()
        except DBAPIError as exc:
            self._close()
            raise _translate(exc) from exc

        self.variants = SqlVariantStock(self._connection)
        self.orders = SqlOrderRepository(self._connection)
        self.catalog = SqlCatalogRepository(self._connection)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._close()
        if exc is not None and is_contention(exc):
            raise ConcurrencyConflict(
                "The store was busy with a competing update; nothing was saved, retry the request"
            ) from exc

    def commit(self) -> None:
        if self._transaction is None:
            raise RuntimeError("Unit of work is not active")
        try:
            self._transaction.commit()
        except DBAPIError as exc:
            raise _translate(exc) from exc

    def rollback(self) -> None:
        if self._transaction is not None and self._transaction.is_active:
            self._transaction.rollback()

    def _close(self) -> None:
        if self._connection is not None:
            self._connection.close()
        self._connection = None
        self._transaction = None


def _translate(exc: DBAPIError) -> Exception:
    if is_contention(exc):
        logger.warning("store: contention detected error=%s", exc.orig)
        return ConcurrencyConflict(
            "The store was busy with a competing update; nothing was saved, retry the request"
        )
    return exc
