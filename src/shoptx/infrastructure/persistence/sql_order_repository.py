"""SQL implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.engine import Connection

from shoptx.domain.model.order import Order, OrderItem, OrderStatus
from shoptx.domain.model.order_row import OrderRow
from shoptx.domain.model.value_objects import Money, Quantity
from shoptx.domain.repository.order_repository import OrderRepository
from shoptx.infrastructure.persistence.schema import (
    customers,
    order_items,
    orders,
    products,
)


class SqlOrderRepository(OrderRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- Writes ---------------------------------------------------------------

    def add(self, order: Order) -> int:
        result = self._conn.execute(
            orders.insert().values(
                customer_id=order.customer_id,
                total_amount=order.total_amount.rounded(),
                status=order.status.value,
                created_at=order.created_at,
            )
        )
        order_id = result.inserted_primary_key[0]
        self._conn.execute(
            order_items.insert(),
            [
                {
                    "order_id": order_id,
                    "product_id": item.product_id,
                    "quantity": item.quantity.value,
                    "price_per_item": item.price_per_item.rounded(),
                }
                for item in order.items
            ],
        )
        order.id = order_id
        return order_id

    def update_status(
        self, order_id: int, status: OrderStatus, *, expected: OrderStatus
    ) -> int:
        result = self._conn.execute(
            orders.update()
            .where(orders.c.id == order_id)
            .where(orders.c.status == expected.value)
            .values(status=status.value)
        )
        return result.rowcount

    def delete(self, order_id: int) -> int:
        self._conn.execute(order_items.delete().where(order_items.c.order_id == order_id))
        result = self._conn.execute(orders.delete().where(orders.c.id == order_id))
        return result.rowcount

    # --- Reads ----------------------------------------------------------------

    def get(self, order_id: int, *, for_update: bool = False) -> Order | None:
        stmt = select(orders).where(orders.c.id == order_id)
        if for_update:
            stmt = stmt.with_for_update()
        header = self._conn.execute(stmt).first()
        if header is None:
            return None

        rows = self._conn.execute(
            select(order_items, products.c.name.label("product_name"))
            .select_from(
                order_items.outerjoin(products, products.c.id == order_items.c.product_id)
            )
            .where(order_items.c.order_id == order_id)
            .order_by(order_items.c.id)
        )
        items = [
            OrderItem(
                id=row.id,
                product_id=row.product_id,
                product_name=row.product_name,
                quantity=Quantity(row.quantity),
                price_per_item=Money.of(row.price_per_item),
            )
            for row in rows
        ]
        return Order(
            id=header.id,
            customer_id=header.customer_id,
            items=items,
            total_amount=Money.of(header.total_amount),
            status=OrderStatus(header.status),
            created_at=header.created_at,
        )

    def find_rows(
        self, *, order_id: int | None = None, customer_id: int | None = None
    ) -> list[OrderRow]:
        stmt = (
            select(
                orders.c.id.label("order_id"),
                orders.c.customer_id,
                customers.c.name.label("customer_name"),
                orders.c.total_amount,
                orders.c.status,
                orders.c.created_at,
                order_items.c.id.label("item_id"),
                order_items.c.product_id,
                products.c.name.label("product_name"),
                order_items.c.quantity,
                order_items.c.price_per_item,
            )
            .select_from(
                orders.join(order_items, order_items.c.order_id == orders.c.id)
                .outerjoin(products, products.c.id == order_items.c.product_id)
                .outerjoin(customers, customers.c.id == orders.c.customer_id)
            )
            .order_by(
                orders.c.created_at.desc(),
                orders.c.id.desc(),
                order_items.c.id.asc(),
            )
        )
        if order_id is not None:
            stmt = stmt.where(orders.c.id == order_id)
        if customer_id is not None:
            stmt = stmt.where(orders.c.customer_id == customer_id)

        return [OrderRow(**row._mapping) for row in self._conn.execute(stmt)]
