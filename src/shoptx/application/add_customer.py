"""Application service: Add Customer use case."""

from __future__ import annotations

from collections.abc import Callable

from shoptx.domain.model.customer import Customer
from shoptx.domain.repository.unit_of_work import UnitOfWork


class AddCustomerHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, name: str, email: str | None = None) -> Customer:
        customer = Customer.create(name=name, email=email)
        with self._uow_factory() as uow:
            customer.id = uow.customers.add(customer)
            uow.commit()
        return customer
