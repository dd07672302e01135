"""Application service: Update Order Status use case.

``pending`` may move to ``completed`` or ``cancelled``; setting it to
``pending`` again is a no-op.  Cancelling is a compensating action: the
status write and the return of every item's quantity to stock happen in
the same unit of work, so the order cannot end up cancelled with stock
missing, or pending with stock already returned.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from shoptx.application.order_request import parse_positive_int
from shoptx.domain.exceptions import (
    InvariantViolation,
    OrderAlreadyFinalized,
    OrderNotFound,
)
from shoptx.domain.model.order import OrderStatus
from shoptx.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: int, new_status: str | OrderStatus) -> OrderStatus:
        order_id = parse_positive_int(order_id, "Order ID")
        status = OrderStatus.parse(new_status)

        with self._uow_factory() as uow:
            order = uow.orders.get(order_id, for_update=True)
            if order is None:
                raise OrderNotFound(order_id)

            previous = order.status
            if not order.transition_to(status):
                return order.status

            # Guarded write: a concurrent unit that finalized the order first
            # leaves nothing to update here.
            if uow.orders.update_status(order_id, status, expected=previous) == 0:
                raise OrderAlreadyFinalized(order_id, "processed")

            if status == OrderStatus.CANCELLED:
                for item in order.items:
                    if uow.products.increment_stock(item.product_id, item.quantity.value) == 0:
                        raise InvariantViolation(
                            f"Cannot restore stock for product #{item.product_id} "
                            f"of order #{order_id}"
                        )

            uow.commit()

        logger.info(
            "order_status_changed",
            order_id=order_id,
            previous=previous.value,
            status=status.value,
            restored_items=len(order.items) if status == OrderStatus.CANCELLED else 0,
        )
        return status
