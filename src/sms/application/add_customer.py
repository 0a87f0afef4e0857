"""Application service: Add Customer use case."""

from __future__ import annotations

from sms.domain.model.customer import Customer
from sms.domain.repository.unit_of_work import UnitOfWorkFactory


class AddCustomerHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        name: str,
        dni: str | None = None,
        phone: str | None = None,
        email: str | None = None,
    ) -> Customer:
        customer = Customer.create(name, dni=dni, phone=phone, email=email)
        with self._uow_factory() as uow:
            customer = uow.customers.add(customer)
            uow.commit()
        return customer
