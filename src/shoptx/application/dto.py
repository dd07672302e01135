"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/outcome boundary and the application
layer without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product ID + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class OrderReceipt:
    """Output of a successful order creation."""

    order_id: int
    total_amount: Decimal


@dataclass(frozen=True)
class OrderItemDTO:
    item_id: int
    product_id: int
    product_name: str | None
    quantity: int
    price_per_item: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.price_per_item * self.quantity


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order with its items, as committed."""

    id: int
    customer_id: int
    customer_name: str | None
    status: str
    total_amount: Decimal
    created_at: datetime
    items: list[OrderItemDTO]
