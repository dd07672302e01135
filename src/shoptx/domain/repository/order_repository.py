"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shoptx.domain.model.order import Order, OrderStatus
from shoptx.domain.model.order_row import OrderRow


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> int:
        """Insert the header and all items; assign and return the order ID."""

    @abstractmethod
    def get(self, order_id: int, *, for_update: bool = False) -> Order | None:
        """Return the order with its items, or None if not found."""

    @abstractmethod
    def update_status(
        self, order_id: int, status: OrderStatus, *, expected: OrderStatus
    ) -> int:
        """Write ``status`` if the stored status still equals ``expected``.

        Returns the number of affected rows.
        """

    @abstractmethod
    def delete(self, order_id: int) -> int:
        """Delete the items, then the header.  Returns deleted headers."""

    @abstractmethod
    def find_rows(
        self, *, order_id: int | None = None, customer_id: int | None = None
    ) -> list[OrderRow]:
        """Flat header+item rows, most recent order first.

        Items keep their insertion order within an order.
        """
