"""Application service: Update Product use case."""

from __future__ import annotations

from collections.abc import Callable

from shoptx.application.order_request import parse_positive_int
from shoptx.domain.exceptions import ProductNotFound
from shoptx.domain.model.value_objects import Money
from shoptx.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: int, new_price: str) -> None:
        """Update a product's price.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time.
        """
        product_id = parse_positive_int(product_id, "Product ID")
        price = Money.of(new_price)
        with self._uow_factory() as uow:
            if uow.products.update_price(product_id, price) == 0:
                raise ProductNotFound(product_id)
            uow.commit()
