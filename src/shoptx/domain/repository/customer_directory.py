"""Abstract customer lookup."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shoptx.domain.model.customer import Customer


class CustomerDirectory(ABC):

    @abstractmethod
    def exists(self, customer_id: int) -> bool:
        """Return True if a customer with this ID exists."""

    @abstractmethod
    def add(self, customer: Customer) -> int:
        """Persist a new customer and return its ID."""
