"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items.  Items are
fixed at creation; afterwards only the status moves, and only forward
out of ``pending``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from shoptx.domain.exceptions import (
    InvalidRequest,
    InvariantViolation,
    OrderAlreadyFinalized,
)
from shoptx.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_final(self) -> bool:
        return self is not OrderStatus.PENDING

    @staticmethod
    def parse(value: str | OrderStatus) -> OrderStatus:
        if isinstance(value, OrderStatus):
            return value
        try:
            return OrderStatus(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise InvalidRequest(
                f"Invalid status {value!r}; expected one of: {allowed}"
            ) from None


@dataclass(frozen=True)
class OrderItem:
    """Captures the price snapshot of a product at order-creation time."""

    product_id: int
    quantity: Quantity
    price_per_item: Money  # locked at order-creation time
    product_name: str | None = None
    id: int | None = None

    @property
    def line_total(self) -> Money:
        return self.price_per_item * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it computes the
    total from the item snapshots.  The ``__init__`` is intentionally
    simple so repositories can reconstitute persisted orders without
    re-validating.
    """

    id: int | None
    customer_id: int
    items: list[OrderItem]
    total_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(customer_id: int, items: list[OrderItem]) -> Order:
        if not items:
            raise InvalidRequest("Order must contain at least one item")

        total = Money.zero()
        for item in items:
            total = total + item.line_total
        return Order(
            id=None,
            customer_id=customer_id,
            items=list(items),
            total_amount=total,
        )

    # --- Invariants -----------------------------------------------------------

    @property
    def items_total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    def check_invariants(self) -> None:
        """Refuse to persist an order the engine should never have built."""
        if not self.items:
            raise InvariantViolation(
                f"Order for customer #{self.customer_id} has no items"
            )
        if self.total_amount.is_zero:
            raise InvariantViolation(
                f"Order for customer #{self.customer_id} has a zero total"
            )
        if self.items_total.rounded() != self.total_amount.rounded():
            raise InvariantViolation(
                f"Order total {self.total_amount} does not match "
                f"its items ({self.items_total})"
            )

    # --- State transitions ----------------------------------------------------

    def transition_to(self, new_status: OrderStatus) -> bool:
        """Move a pending order to ``new_status``.

        Returns False when nothing changes (pending -> pending).  Any move
        out of ``completed`` or ``cancelled`` is rejected, including a
        second cancellation.
        """
        if self.status.is_final:
            raise OrderAlreadyFinalized(self.id, self.status.value)  # type: ignore[arg-type]
        if new_status == self.status:
            return False
        self.status = new_status
        return True

    @property
    def holds_stock(self) -> bool:
        """True while the order's quantities are still deducted from stock."""
        return self.status != OrderStatus.CANCELLED
