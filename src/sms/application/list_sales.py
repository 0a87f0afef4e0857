"""Application services: sale listings and period totals (queries).

Read-only: these never touch stock and may run alongside any write.
"""

from __future__ import annotations

from datetime import date

from sms.domain.exceptions import SaleError
from sms.domain.model.sale import Sale
from sms.domain.model.value_objects import Money
from sms.domain.repository.sale_repository import SaleFilter
from sms.domain.repository.unit_of_work import UnitOfWorkFactory


def _check_period(date_from: date | None, date_to: date | None) -> None:
    if date_from is not None and date_to is not None and date_from > date_to:
        raise SaleError.validation(
            "date_from", "Start date cannot be after end date"
        )


class ListSalesHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, criteria: SaleFilter | None = None) -> list[Sale]:
        criteria = criteria or SaleFilter()
        _check_period(criteria.date_from, criteria.date_to)
        with self._uow_factory(read_only=True) as uow:
            return uow.sales.find(criteria)


class SalesTotalHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, date_from: date, date_to: date) -> Money:
        """Sum of sale totals dated within ``[date_from, date_to]``."""
        if date_from is None or date_to is None:
            raise SaleError.validation("date_from", "Both dates are required")
        _check_period(date_from, date_to)
        with self._uow_factory(read_only=True) as uow:
            return uow.sales.total_between(date_from, date_to)


class SaleReferencesHandler:
    """Answers "is this customer/product still referenced by a sale?".

    Customer and product removal happens outside the sale engine; callers
    ask here first.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def customer_has_sales(self, customer_id: int) -> bool:
        with self._uow_factory(read_only=True) as uow:
            return uow.sales.exists_for_customer(customer_id)

    def product_has_sales(self, product_id: int) -> bool:
        with self._uow_factory(read_only=True) as uow:
            return uow.sales.exists_for_product(product_id)
