"""SQL implementation of ProductRepository.

Stock changes are single ``UPDATE`` statements.  The decrement carries
its own precondition (``stock >= :quantity``) so the affected-row count
tells the caller whether it applied.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.engine import Connection, Row

from shoptx.domain.model.product import Product
from shoptx.domain.model.value_objects import Money
from shoptx.domain.repository.product_repository import ProductRepository
from shoptx.infrastructure.persistence.schema import products


class SqlProductRepository(ProductRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- Reads ----------------------------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._conn.execute(
            select(products).where(products.c.id == product_id)
        ).first()
        return self._to_domain(row) if row is not None else None

    def get_by_ids(
        self, product_ids: Sequence[int], *, for_update: bool = False
    ) -> list[Product]:
        if not product_ids:
            return []
        # Lock in ID order so two orders over the same products cannot deadlock.
        stmt = (
            select(products)
            .where(products.c.id.in_(list(product_ids)))
            .order_by(products.c.id)
        )
        if for_update:
            stmt = stmt.with_for_update()
        return [self._to_domain(row) for row in self._conn.execute(stmt)]

    def list_all(self) -> list[Product]:
        rows = self._conn.execute(select(products).order_by(products.c.id))
        return [self._to_domain(row) for row in rows]

    # --- Writes ---------------------------------------------------------------

    def add(self, product: Product) -> int:
        result = self._conn.execute(
            products.insert().values(
                name=product.name,
                description=product.description,
                price=product.price.rounded(),
                stock=product.stock,
            )
        )
        return result.inserted_primary_key[0]

    def update_price(self, product_id: int, price: Money) -> int:
        result = self._conn.execute(
            products.update()
            .where(products.c.id == product_id)
            .values(price=price.rounded())
        )
        return result.rowcount

    def decrement_stock(self, product_id: int, quantity: int) -> int:
        result = self._conn.execute(
            products.update()
            .where(products.c.id == product_id)
            .where(products.c.stock >= quantity)
            .values(stock=products.c.stock - quantity)
        )
        return result.rowcount

    def increment_stock(self, product_id: int, quantity: int) -> int:
        result = self._conn.execute(
            products.update()
            .where(products.c.id == product_id)
            .values(stock=products.c.stock + quantity)
        )
        return result.rowcount

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: Row) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            price=Money.of(row.price),
            stock=row.stock,
            description=row.description,
        )
