"""Application service: Add Product use case."""

from __future__ import annotations

from collections.abc import Callable

from shoptx.domain.model.product import Product
from shoptx.domain.model.value_objects import Money
from shoptx.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self, name: str, price: str, stock: int, description: str | None = None
    ) -> Product:
        """Add a new product to the catalog with its opening stock."""
        product = Product.create(
            name=name, price=Money.of(price), stock=stock, description=description
        )
        with self._uow_factory() as uow:
            product.id = uow.products.add(product)
            uow.commit()
        return product
