"""Application service: Create Sale use case.

Validation, the stock decrement and the sale insert share one unit of
work.  If the insert fails after stock was taken, the rollback hands the
units back: nothing leaks.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, cast

from sms.application.failures import log_failure
from sms.domain.exceptions import SaleError
from sms.domain.model.product import Product
from sms.domain.model.sale import Sale, SaleCandidate
from sms.domain.model.value_objects import Quantity
from sms.domain.repository.unit_of_work import UnitOfWorkFactory
from sms.domain.service.sale_validator import DEFAULT_RETENTION_DAYS, SaleValidator

logger = logging.getLogger(__name__)


class CreateSaleHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        clock: Callable[[], date] = date.today,
        retention_days: int = DEFAULT_RETENTION_DAYS,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock
        self._retention_days = retention_days

    def handle(
        self,
        sale_date: date | None,
        customer_id: int | None,
        product_id: int | None,
        quantity: int | None,
    ) -> Sale:
        """Record a new sale and take its units out of stock.

        Steps:
        1. Validate the candidate (no side effects on failure).
        2. Snapshot the product's *current* price as the unit price.
        3. Conditionally decrement stock; refuse on oversell.
        4. Compute the total and insert the sale row.
        5. Commit.
        """
        candidate = SaleCandidate(sale_date, customer_id, product_id, quantity)
        try:
            with self._uow_factory() as uow:
                validator = SaleValidator(
                    uow.customers, uow.products, self._clock(), self._retention_days
                )
                result = validator.validate(candidate)
                result.raise_for_failure()
                product = cast(Product, result.product)

                qty = Quantity(candidate.quantity)  # type: ignore[arg-type]
                uow.stock.try_decrement(
                    product.id, qty.value  # type: ignore[arg-type]
                ).raise_if_refused()

                sale = Sale.create(
                    sale_date=candidate.date,  # type: ignore[arg-type]
                    customer_id=candidate.customer_id,  # type: ignore[arg-type]
                    product_id=product.id,  # type: ignore[arg-type]
                    quantity=qty,
                    unit_price=product.price,  # <-- price snapshot
                )
                sale = uow.sales.add(sale)
                uow.commit()
        except SaleError as exc:
            log_failure(logger, "Create sale", exc)
            raise

        logger.info(
            "Sale #%s created: product #%s x%s, total %s",
            sale.id, sale.product_id, sale.quantity, sale.total,
        )
        return sale
