"""SQL implementation of CustomerDirectory."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.engine import Connection

from shoptx.domain.model.customer import Customer
from shoptx.domain.repository.customer_directory import CustomerDirectory
from shoptx.infrastructure.persistence.schema import customers


class SqlCustomerDirectory(CustomerDirectory):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def exists(self, customer_id: int) -> bool:
        row = self._conn.execute(
            select(customers.c.id).where(customers.c.id == customer_id)
        ).first()
        return row is not None

    def add(self, customer: Customer) -> int:
        result = self._conn.execute(
            customers.insert().values(name=customer.name, email=customer.email)
        )
        return result.inserted_primary_key[0]
