"""Shape validation for incoming order requests.

Runs before any store access, so a malformed request never opens a
transaction.  Accepts ``OrderItemSpec`` values or plain mappings with
``productId``/``product_id`` and ``quantity`` keys.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from shoptx.application.dto import OrderItemSpec
from shoptx.domain.exceptions import InvalidRequest

# Ids and quantities are stored in 32-bit INTEGER columns.
MAX_INTEGER = 2**31 - 1


def parse_order_request(
    customer_id: Any, items: Any
) -> tuple[int, list[OrderItemSpec]]:
    """Return a normalized (customer_id, specs) pair or raise InvalidRequest."""
    customer = parse_positive_int(customer_id, "Customer ID")

    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence) or not items:
        raise InvalidRequest("Customer ID and order items are required")

    specs: list[OrderItemSpec] = []
    seen: set[int] = set()
    for position, raw in enumerate(items, start=1):
        spec = _to_spec(raw, position)
        if spec.product_id in seen:
            raise InvalidRequest(f"Product #{spec.product_id} is listed more than once")
        seen.add(spec.product_id)
        specs.append(spec)
    return customer, specs


def _to_spec(raw: Any, position: int) -> OrderItemSpec:
    if isinstance(raw, OrderItemSpec):
        product_id, quantity = raw.product_id, raw.quantity
    elif isinstance(raw, Mapping):
        product_id = raw.get("productId", raw.get("product_id"))
        quantity = raw.get("quantity")
    else:
        raise InvalidRequest(f"Item {position} must be an object with productId and quantity")

    if product_id is None:
        raise InvalidRequest(f"Item {position} is missing a product ID")
    return OrderItemSpec(
        product_id=parse_positive_int(product_id, f"Item {position} product ID"),
        quantity=parse_positive_int(quantity, f"Item {position} quantity"),
    )


def parse_positive_int(value: Any, label: str) -> int:
    """Coerce an id or quantity, rejecting anything the store cannot hold."""
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidRequest(f"{label} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidRequest(f"{label} must be positive, got {value}")
    if value > MAX_INTEGER:
        raise InvalidRequest(f"{label} is out of range, got {value}")
    return value
