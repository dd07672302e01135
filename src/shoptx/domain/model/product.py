"""Product aggregate.

Products live independently of orders.  Prices change over time; stock
moves only through the conditional decrement/increment of the product
repository, never by assignment.
"""

from __future__ import annotations

from dataclasses import dataclass

from shoptx.domain.exceptions import InvalidRequest
from shoptx.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog, as read from the inventory store.

    ``stock`` is the quantity visible to the unit of work that loaded
    the product.
    """

    id: int | None
    name: str
    price: Money
    stock: int = 0
    description: str | None = None

    @staticmethod
    def create(
        name: str, price: Money, stock: int, description: str | None = None
    ) -> Product:
        if not name or not name.strip():
            raise InvalidRequest("Product name is required")
        if not isinstance(stock, int) or isinstance(stock, bool) or stock < 0:
            raise InvalidRequest("Initial stock must be a non-negative integer")
        return Product(
            id=None,
            name=name.strip(),
            price=price,
            stock=stock,
            description=description,
        )

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity
