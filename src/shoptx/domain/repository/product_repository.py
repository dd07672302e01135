"""Abstract repository for the Product aggregate and its stock.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (SQL, in-memory) live in
the infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from shoptx.domain.model.product import Product
from shoptx.domain.model.value_objects import Money


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_ids(
        self, product_ids: Sequence[int], *, for_update: bool = False
    ) -> list[Product]:
        """Fetch every listed product in one round trip.

        Missing IDs are simply absent from the result.  With
        ``for_update`` the rows stay locked until the unit of work ends.
        """

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, ordered by ID."""

    @abstractmethod
    def add(self, product: Product) -> int:
        """Persist a new product and return its ID."""

    @abstractmethod
    def update_price(self, product_id: int, price: Money) -> int:
        """Set a new price.  Returns the number of affected rows."""

    @abstractmethod
    def decrement_stock(self, product_id: int, quantity: int) -> int:
        """Subtract ``quantity`` only if at least that much is in stock.

        Returns the number of affected rows; 0 means the product is
        missing or the stock was too low.
        """

    @abstractmethod
    def increment_stock(self, product_id: int, quantity: int) -> int:
        """Add ``quantity`` back to stock.  Returns the affected rows."""
