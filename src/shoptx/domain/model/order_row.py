"""Flat read-side row: one order header joined with one of its items."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class OrderRow:
    order_id: int
    customer_id: int
    customer_name: str | None
    total_amount: Decimal
    status: str
    created_at: datetime
    item_id: int
    product_id: int
    product_name: str | None
    quantity: int
    price_per_item: Decimal
