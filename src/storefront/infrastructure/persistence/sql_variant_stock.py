"""SQL implementation of VariantStock.

Each mutating primitive is one UPDATE statement whose WHERE clause
carries the whole precondition, with RETURNING for the new value, so the
database's row-level atomicity is what prevents oversells.
"""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.engine import Connection

from storefront.domain.exceptions import ValidationError, VariantNotFound
from storefront.domain.model.variant import Variant
from storefront.domain.repository.variant_stock import DecrementResult, VariantStock
from storefront.infrastructure.persistence.rows import select_variants, variant_from_row
from storefront.infrastructure.persistence.schema import variants

_ACTIVE = variants.c.is_active.is_(True)


class SqlVariantStock(VariantStock):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- Primitives -----------------------------------------------------------

    def conditional_decrement(self, variant_id: int, amount: int) -> DecrementResult:
        _require_positive(amount)
        stmt = (
            update(variants)
            .where(
                variants.c.variant_id == variant_id,
                _ACTIVE,
                variants.c.stock_quantity >= amount,
            )
            .values(stock_quantity=variants.c.stock_quantity - amount)
            .returning(variants.c.stock_quantity)
        )
        new_quantity = self._conn.execute(stmt).scalar_one_or_none()
        if new_quantity is not None:
            return DecrementResult(ok=True, new_quantity=new_quantity)
        # nothing written: report what is there (raises if the variant is gone)
        return DecrementResult(ok=False, new_quantity=self.read(variant_id))

    def increment(self, variant_id: int, amount: int) -> int:
        _require_positive(amount)
        stmt = (
            update(variants)
            .where(variants.c.variant_id == variant_id, _ACTIVE)
            .values(stock_quantity=variants.c.stock_quantity + amount)
            .returning(variants.c.stock_quantity)
        )
        return self._returning_or_missing(stmt, variant_id)

    def set_absolute(self, variant_id: int, amount: int) -> int:
        if amount < 0:
            raise ValidationError("Stock quantity cannot be negative")
        stmt = (
            update(variants)
            .where(variants.c.variant_id == variant_id, _ACTIVE)
            .values(stock_quantity=amount)
            .returning(variants.c.stock_quantity)
        )
        return self._returning_or_missing(stmt, variant_id)

    def read(self, variant_id: int) -> int:
        quantity = self._conn.execute(
            select(variants.c.stock_quantity).where(variants.c.variant_id == variant_id, _ACTIVE)
        ).scalar_one_or_none()
        if quantity is None:
            raise VariantNotFound(variant_id)
        return quantity

    # --- Lookups --------------------------------------------------------------

    def get(self, variant_id: int) -> Variant | None:
        row = self._conn.execute(
            select_variants().where(variants.c.variant_id == variant_id, _ACTIVE)
        ).first()
        return variant_from_row(row) if row is not None else None

    def get_by_sku(self, sku: str) -> Variant | None:
        row = self._conn.execute(select_variants().where(variants.c.sku == sku, _ACTIVE)).first()
        return variant_from_row(row) if row is not None else None

    def find_low_stock(self, threshold: int) -> list[Variant]:
        rows = self._conn.execute(
            select_variants()
            .where(_ACTIVE, variants.c.stock_quantity <= threshold)
            .order_by(variants.c.stock_quantity, variants.c.variant_id)
        )
        return [variant_from_row(row) for row in rows]

    # --- Internal helpers -----------------------------------------------------

    def _returning_or_missing(self, stmt, variant_id: int) -> int:
        new_quantity = self._conn.execute(stmt).scalar_one_or_none()
        if new_quantity is None:
            raise VariantNotFound(variant_id)
        return new_quantity


def _require_positive(amount: int) -> None:
    if amount <= 0:
        raise ValidationError("Stock adjustment amount must be positive")
