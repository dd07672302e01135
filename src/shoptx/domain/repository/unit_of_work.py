"""Abstract Unit of Work: one atomic unit against the store.

Usage::

    with uow_factory() as uow:
        ...
        uow.commit()

Leaving the block without ``commit()`` rolls everything back, whether
the block returned early or raised.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shoptx.domain.repository.customer_directory import CustomerDirectory
from shoptx.domain.repository.order_repository import OrderRepository
from shoptx.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):
    customers: CustomerDirectory
    products: ProductRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change of this unit visible at once."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes.  A no-op after commit."""
