"""Regroup flat header+item rows into nested orders.

A pure fold: the same rows always give the same orders, one per
distinct order ID in first-seen order, items in row order.
"""

from __future__ import annotations

from collections.abc import Iterable

from shoptx.application.dto import OrderDTO, OrderItemDTO
from shoptx.domain.model.order_row import OrderRow


def group_order_rows(rows: Iterable[OrderRow]) -> list[OrderDTO]:
    headers: dict[int, OrderRow] = {}
    items: dict[int, list[OrderItemDTO]] = {}

    for row in rows:
        if row.order_id not in headers:
            headers[row.order_id] = row
            items[row.order_id] = []
        items[row.order_id].append(
            OrderItemDTO(
                item_id=row.item_id,
                product_id=row.product_id,
                product_name=row.product_name,
                quantity=row.quantity,
                price_per_item=row.price_per_item,
            )
        )

    return [
        OrderDTO(
            id=header.order_id,
            customer_id=header.customer_id,
            customer_name=header.customer_name,
            status=header.status,
            total_amount=header.total_amount,
            created_at=header.created_at,
            items=items[order_id],
        )
        for order_id, header in headers.items()
    ]
