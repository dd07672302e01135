"""Customer reference data.

Orders only hold the customer id; the engine never loads a full
Customer, it asks the directory whether the id exists.
"""

from __future__ import annotations

from dataclasses import dataclass

from shoptx.domain.exceptions import InvalidRequest


@dataclass
class Customer:
    id: int | None
    name: str
    email: str | None = None

    @staticmethod
    def create(name: str, email: str | None = None) -> Customer:
        if not name or not name.strip():
            raise InvalidRequest("Customer name is required")
        return Customer(id=None, name=name.strip(), email=email or None)
