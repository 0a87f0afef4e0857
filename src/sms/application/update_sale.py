"""Application service: Update Sale use case.

Amending a sale must leave stock as if the old sale had never taken its
units and the new one had.  Two shapes:

* Same product: only the quantity *delta* moves.  More units go through
  the conditional decrement; fewer units are handed back.
* Different product: release the old product's units, then reserve the
  new product's.  If the reservation is refused, the release is undone
  before the unit of work is rolled back, so stock ends exactly where it
  started and the old sale is kept unchanged.
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
from sms.domain.repository.stock_ledger import StockLedger
from sms.domain.repository.unit_of_work import UnitOfWorkFactory
from sms.domain.service.sale_validator import DEFAULT_RETENTION_DAYS, SaleValidator

logger = logging.getLogger(__name__)


class UpdateSaleHandler:

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
        sale_id: int,
        sale_date: date | None,
        customer_id: int | None,
        product_id: int | None,
        quantity: int | None,
    ) -> Sale:
        candidate = SaleCandidate(sale_date, customer_id, product_id, quantity)
        try:
            with self._uow_factory() as uow:
                old = uow.sales.get_by_id(sale_id)
                if old is None:
                    raise SaleError.not_found("Sale", sale_id)

                validator = SaleValidator(
                    uow.customers, uow.products, self._clock(), self._retention_days
                )
                result = validator.validate(candidate)
                result.raise_for_failure()
                product = cast(Product, result.product)
                qty = Quantity(candidate.quantity)  # type: ignore[arg-type]

                if old.product_id == product.id:
                    self._adjust_same_product(uow.stock, old, qty.value)
                    # price at the time of the original sale still applies
                    unit_price = old.unit_price
                else:
                    self._move_to_product(
                        uow.stock, old, product.id, qty.value  # type: ignore[arg-type]
                    )
                    unit_price = product.price

                updated = old.revised(
                    sale_date=candidate.date,  # type: ignore[arg-type]
                    customer_id=candidate.customer_id,  # type: ignore[arg-type]
                    product_id=product.id,  # type: ignore[arg-type]
                    quantity=qty,
                    unit_price=unit_price,
                )
                if not uow.sales.update(updated):
                    raise SaleError.conflict("Sale", sale_id)
                uow.commit()
        except SaleError as exc:
            log_failure(logger, f"Update sale #{sale_id}", exc)
            raise

        logger.info(
            "Sale #%s updated: product #%s x%s (was #%s x%s), total %s",
            updated.id, updated.product_id, updated.quantity,
            old.product_id, old.quantity, updated.total,
        )
        return updated

    # --- Stock adjustment -----------------------------------------------------

    @staticmethod
    def _adjust_same_product(stock: StockLedger, old: Sale, new_quantity: int) -> None:
        delta = new_quantity - old.quantity.value
        if delta > 0:
            stock.try_decrement(old.product_id, delta).raise_if_refused(new_quantity)
        elif delta < 0:
            stock.increment(old.product_id, -delta)

    @staticmethod
    def _move_to_product(
        stock: StockLedger, old: Sale, new_product_id: int, new_quantity: int
    ) -> None:
        stock.increment(old.product_id, old.quantity.value)
        reserved = stock.try_decrement(new_product_id, new_quantity)
        if not reserved.applied:
            # Compensate the release; cannot be refused since those units
            # were handed back a moment ago inside the same transaction.
            restored = stock.try_decrement(old.product_id, old.quantity.value)
            if not restored.applied:
                raise SaleError.conflict("Product", old.product_id)
            reserved.raise_if_refused()
