"""Application service: Restock Product use case.

Goods received go through the stock ledger like every other stock
movement, so a restock can never overwrite units a concurrent sale
just took.
"""

from __future__ import annotations

import logging

from sms.domain.exceptions import SaleError
from sms.domain.repository.unit_of_work import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class RestockProductHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: int, quantity: int) -> int:
        """Add ``quantity`` units; returns the new stock level."""
        with self._uow_factory() as uow:
            uow.stock.increment(product_id, quantity)
            stock = uow.stock.current_stock(product_id)
            if stock is None:
                raise SaleError.not_found("Product", product_id)
            uow.commit()

        logger.info("Product #%s restocked by %s (now %s)", product_id, quantity, stock)
        return stock
