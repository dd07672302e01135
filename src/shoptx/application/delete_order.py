"""Application service: Delete Order use case.

Deleting drops historical data; cancelling is usually the better
choice.  When it is needed, the order's quantities go back to stock in
the same unit of work that removes the items and the header.  A
cancelled order already returned its stock, so nothing is restored
twice.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from shoptx.application.order_request import parse_positive_int
from shoptx.domain.exceptions import InvariantViolation, OrderNotFound
from shoptx.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class DeleteOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: int) -> None:
        order_id = parse_positive_int(order_id, "Order ID")
        with self._uow_factory() as uow:
            order = uow.orders.get(order_id, for_update=True)
            if order is None:
                raise OrderNotFound(order_id)

            restored = 0
            if order.holds_stock:
                for item in order.items:
                    if uow.products.increment_stock(item.product_id, item.quantity.value) == 0:
                        raise InvariantViolation(
                            f"Cannot restore stock for product #{item.product_id} "
                            f"of order #{order_id}"
                        )
                    restored += 1

            if uow.orders.delete(order_id) == 0:
                raise OrderNotFound(order_id)

            uow.commit()

        logger.info(
            "order_deleted",
            order_id=order_id,
            status=order.status.value,
            restored_items=restored,
        )
