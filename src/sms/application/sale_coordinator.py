"""Sale Transaction Coordinator — the entry point callers (CLI, UI) use.

A thin, stateless facade over the individual use-case handlers.  Every
call opens its own unit of work, so one coordinator may be shared by
many threads.
"""

from __future__ import annotations

from datetime import date
from typing import Callable

from sms.application.create_sale import CreateSaleHandler
from sms.application.delete_sale import DeleteSaleHandler
from sms.application.list_sales import (
    ListSalesHandler,
    SaleReferencesHandler,
    SalesTotalHandler,
)
from sms.application.show_sale import ShowSaleHandler
from sms.application.update_sale import UpdateSaleHandler
from sms.domain.model.sale import Sale
from sms.domain.model.value_objects import Money
from sms.domain.repository.sale_repository import SaleFilter
from sms.domain.repository.unit_of_work import UnitOfWorkFactory
from sms.domain.service.sale_validator import DEFAULT_RETENTION_DAYS


class SaleCoordinator:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        clock: Callable[[], date] = date.today,
        retention_days: int = DEFAULT_RETENTION_DAYS,
    ) -> None:
        self._create = CreateSaleHandler(uow_factory, clock, retention_days)
        self._update = UpdateSaleHandler(uow_factory, clock, retention_days)
        self._delete = DeleteSaleHandler(uow_factory)
        self._show = ShowSaleHandler(uow_factory)
        self._list = ListSalesHandler(uow_factory)
        self._total = SalesTotalHandler(uow_factory)
        self._references = SaleReferencesHandler(uow_factory)

    # --- Commands -------------------------------------------------------------

    def create_sale(
        self, sale_date: date, customer_id: int, product_id: int, quantity: int
    ) -> Sale:
        return self._create.handle(sale_date, customer_id, product_id, quantity)

    def update_sale(
        self,
        sale_id: int,
        sale_date: date,
        customer_id: int,
        product_id: int,
        quantity: int,
    ) -> Sale:
        return self._update.handle(sale_id, sale_date, customer_id, product_id, quantity)

    def delete_sale(self, sale_id: int) -> None:
        self._delete.handle(sale_id)

    # --- Queries --------------------------------------------------------------

    def get_sale(self, sale_id: int) -> Sale:
        return self._show.handle(sale_id)

    def list_sales(self, criteria: SaleFilter | None = None) -> list[Sale]:
        return self._list.handle(criteria)

    def sales_total(self, date_from: date, date_to: date) -> Money:
        return self._total.handle(date_from, date_to)

    def customer_has_sales(self, customer_id: int) -> bool:
        return self._references.customer_has_sales(customer_id)

    def product_has_sales(self, product_id: int) -> bool:
        return self._references.product_has_sales(product_id)
