"""Application service: Show Sale use case (query)."""

from __future__ import annotations

from sms.domain.exceptions import SaleError
from sms.domain.model.sale import Sale
from sms.domain.repository.unit_of_work import UnitOfWorkFactory


class ShowSaleHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, sale_id: int) -> Sale:
        if isinstance(sale_id, bool) or not isinstance(sale_id, int) or sale_id <= 0:
            raise SaleError.validation("sale_id", "Sale ID must be greater than zero")
        with self._uow_factory(read_only=True) as uow:
            sale = uow.sales.get_by_id(sale_id)
        if sale is None:
            raise SaleError.not_found("Sale", sale_id)
        return sale
