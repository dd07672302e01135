"""Application service: Create Order use case.

Validates the request, prices it from a single snapshot of the
referenced products, then writes the header, the items and the stock
decrements inside one unit of work.  Nothing is visible unless every
step succeeds.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from shoptx.application.dto import OrderReceipt
from shoptx.application.order_request import parse_order_request
from shoptx.domain.exceptions import (
    CustomerNotFound,
    InsufficientStock,
    ProductNotFound,
)
from shoptx.domain.model.order import Order, OrderItem
from shoptx.domain.model.value_objects import Quantity
from shoptx.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, customer_id: Any, items: Any) -> OrderReceipt:
        """Create a new pending order.

        Steps:
        1. Check the request shape (no store access on failure).
        2. Check the customer exists.
        3. Load every referenced product in one round trip, rows locked.
        4. Check stock for each item before mutating anything.
        5. Build line items from the price snapshot read in step 3.
        6. Insert header and items, decrement stock, commit.
        """
        customer_id, specs = parse_order_request(customer_id, items)

        with self._uow_factory() as uow:
            if not uow.customers.exists(customer_id):
                raise CustomerNotFound(customer_id)

            products = {
                p.id: p
                for p in uow.products.get_by_ids(
                    [spec.product_id for spec in specs], for_update=True
                )
            }
            for spec in specs:
                if spec.product_id not in products:
                    raise ProductNotFound(spec.product_id)

            line_items: list[OrderItem] = []
            for spec in specs:
                product = products[spec.product_id]
                if not product.has_stock_for(spec.quantity):
                    raise InsufficientStock(
                        product_id=spec.product_id,
                        product_name=product.name,
                        available=product.stock,
                        requested=spec.quantity,
                    )
                line_items.append(
                    OrderItem(
                        product_id=spec.product_id,
                        product_name=product.name,
                        quantity=Quantity(spec.quantity),
                        price_per_item=product.price,  # <-- price snapshot
                    )
                )

            order = Order.create(customer_id=customer_id, items=line_items)
            order.check_invariants()
            order_id = uow.orders.add(order)

            for item in order.items:
                # The conditional decrement is the last word on sufficiency.
                if uow.products.decrement_stock(item.product_id, item.quantity.value) == 0:
                    product = products[item.product_id]
                    raise InsufficientStock(
                        product_id=item.product_id,
                        product_name=product.name,
                        available=product.stock,
                        requested=item.quantity.value,
                    )

            uow.commit()

        logger.info(
            "order_created",
            order_id=order_id,
            customer_id=customer_id,
            items=len(order.items),
            total_amount=str(order.total_amount.rounded()),
        )
        return OrderReceipt(order_id=order_id, total_amount=order.total_amount.rounded())
