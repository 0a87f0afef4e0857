"""Application service: Delete Sale use case.

Removing a sale hands its units back to the product.  Row delete and
stock restore commit together; if the restore fails, the sale reappears.
"""

from __future__ import annotations

import logging

from sms.application.failures import log_failure
from sms.domain.exceptions import SaleError
from sms.domain.repository.unit_of_work import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class DeleteSaleHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, sale_id: int) -> None:
        try:
            with self._uow_factory() as uow:
                sale = uow.sales.get_by_id(sale_id)
                if sale is None:
                    raise SaleError.not_found("Sale", sale_id)

                if not uow.sales.delete(sale_id):
                    raise SaleError.conflict("Sale", sale_id)
                uow.stock.increment(sale.product_id, sale.quantity.value)
                uow.commit()
        except SaleError as exc:
            log_failure(logger, f"Delete sale #{sale_id}", exc)
            raise

        logger.info(
            "Sale #%s deleted: %s units returned to product #%s",
            sale_id, sale.quantity, sale.product_id,
        )
