"""Application service: order queries (read side).

Each query reads the flat header+item join and regroups it with
``group_order_rows``, so what comes back is exactly what the engine
committed.
"""

from __future__ import annotations

from collections.abc import Callable

from shoptx.application.dto import OrderDTO
from shoptx.application.order_request import parse_positive_int
from shoptx.application.order_rows import group_order_rows
from shoptx.domain.exceptions import InvalidRequest, OrderNotFound
from shoptx.domain.repository.unit_of_work import UnitOfWork


class OrderQueryService:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def get_by_id(self, order_id: int) -> OrderDTO:
        orders = self._read(order_id=order_id)
        if not orders:
            raise OrderNotFound(order_id)
        return orders[0]

    def get_by_customer(self, customer_id: int) -> list[OrderDTO]:
        """Orders of one customer, most recent first."""
        orders = self._read(customer_id=customer_id)
        if not orders:
            raise OrderNotFound(None, f"No orders found for customer #{customer_id}")
        return orders

    def get_all(self) -> list[OrderDTO]:
        return self._read()

    def _read(self, **criteria) -> list[OrderDTO]:
        try:
            criteria = {key: parse_positive_int(value, key) for key, value in criteria.items()}
        except InvalidRequest:
            # An id the store cannot hold matches no order.
            return []
        with self._uow_factory() as uow:
            rows = uow.orders.find_rows(**criteria)
        return group_order_rows(rows)
