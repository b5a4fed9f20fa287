"""SQL implementation of OrderRepository."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import replace

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import Connection

from storefront.domain.model.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from storefront.domain.model.value_objects import Money, Pagination, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.rows import as_utc
from storefront.infrastructure.persistence.schema import order_items, orders


class SqlOrderRepository(OrderRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> Order:
        result = self._conn.execute(
            insert(orders).values(
                user_id=order.user_id,
                shipping_address_ref=order.shipping_address_ref,
                order_status=order.status.value,
                payment_status=order.payment_status.value,
                payment_method=order.payment_method.value,
                total_amount_cents=order.total.cents,
                created_at=order.created_at,
                notes=order.notes,
            )
        )
        order.id = result.inserted_primary_key[0]

        stored: list[OrderItem] = []
        for position, item in enumerate(order.items):
            item_result = self._conn.execute(
                insert(order_items).values(
                    order_id=order.id,
                    variant_id=item.variant_id,
                    position=position,
                    sku=item.sku,
                    quantity=item.quantity.value,
                    unit_price_cents=item.unit_price.cents,
                )
            )
            stored.append(replace(item, id=item_result.inserted_primary_key[0]))
        order.items = stored
        return order

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._conn.execute(select(orders).where(orders.c.order_id == order_id)).first()
        if row is None:
            return None
        return self._to_domain(row, self._load_items([order_id]).get(order_id, []))

    def save_transition(self, order: Order, expected: Collection[OrderStatus]) -> bool:
        result = self._conn.execute(
            update(orders)
            .where(
                orders.c.order_id == order.id,
                orders.c.order_status.in_([status.value for status in expected]),
            )
            .values(
                order_status=order.status.value,
                shipped_at=order.shipped_at,
                delivered_at=order.delivered_at,
                tracking_number=order.tracking_number,
                shipping_method=order.shipping_method,
                notes=order.notes,
                cancellation_reason=order.cancellation_reason,
            )
        )
        return result.rowcount == 1

    def save_payment(self, order: Order) -> None:
        self._conn.execute(
            update(orders)
            .where(orders.c.order_id == order.id)
            .values(
                payment_status=order.payment_status.value,
                payment_method=order.payment_method.value,
            )
        )

    def list_by_user(
        self,
        user_id: str,
        pagination: Pagination,
        status: OrderStatus | None = None,
        payment_status: PaymentStatus | None = None,
    ) -> tuple[list[Order], int]:
        conditions = [orders.c.user_id == user_id]
        if status is not None:
            conditions.append(orders.c.order_status == status.value)
        if payment_status is not None:
            conditions.append(orders.c.payment_status == payment_status.value)

        total = self._conn.execute(
            select(func.count()).select_from(orders).where(*conditions)
        ).scalar_one()
        rows = self._conn.execute(
            select(orders)
            .where(*conditions)
            .order_by(orders.c.created_at.desc(), orders.c.order_id.desc())
            .limit(pagination.page_size)
            .offset(pagination.offset)
        ).all()

        items = self._load_items([row.order_id for row in rows])
        return [self._to_domain(row, items.get(row.order_id, [])) for row in rows], total

    # --- Serialization --------------------------------------------------------

    def _load_items(self, order_ids: list[int]) -> dict[int, list[OrderItem]]:
        if not order_ids:
            return {}
        rows = self._conn.execute(
            select(order_items)
            .where(order_items.c.order_id.in_(order_ids))
            .order_by(order_items.c.order_id, order_items.c.position)
        )
        grouped: dict[int, list[OrderItem]] = {}
        for row in rows:
            grouped.setdefault(row.order_id, []).append(
                OrderItem(
                    id=row.order_item_id,
                    variant_id=row.variant_id,
                    sku=row.sku,
                    quantity=Quantity(row.quantity),
                    unit_price=Money.of_cents(row.unit_price_cents),
                )
            )
        return grouped

    @staticmethod
    def _to_domain(row, items: list[OrderItem]) -> Order:
        return Order(
            id=row.order_id,
            user_id=row.user_id,
            shipping_address_ref=row.shipping_address_ref,
            items=items,
            status=OrderStatus(row.order_status),
            payment_status=PaymentStatus(row.payment_status),
            payment_method=PaymentMethod(row.payment_method),
            created_at=as_utc(row.created_at),
            shipped_at=as_utc(row.shipped_at),
            delivered_at=as_utc(row.delivered_at),
            tracking_number=row.tracking_number,
            shipping_method=row.shipping_method,
            notes=row.notes,
            cancellation_reason=row.cancellation_reason,
        )
